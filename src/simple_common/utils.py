import re
import sys
import importlib
import inspect

from datetime import date
from typing import Type, List, Any, Optional

from unidecode import unidecode


def get_all_class_instances(module_path: str) -> List[Any]:
    instances: List[object] = []

    class_members: List[tuple[str, Any]] = inspect.getmembers(
        sys.modules[module_path], inspect.isclass
    )

    for class_member in class_members:
        target_class: Type[object] = getattr(
            importlib.import_module(module_path), class_member[0]
        )

        instances.append(target_class())

    return instances


def today() -> date:
    return date.today()


def slugify(value: str) -> str:
    """
    Gera identificador em minúsculas, sem acentos e com hífens,
    usado como nome de usuário dos consultores.
    """
    ascii_value = unidecode(str(value)).lower()
    return re.sub(r"[^a-z0-9]+", "-", ascii_value).strip("-")


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None

    text = str(value).strip()
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", text):
        raise ValueError(f"Data fora do formato AAAA-MM-DD: {value}")

    return date.fromisoformat(text)
