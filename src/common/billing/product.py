from enum import Enum
from typing import Any

from common.exceptions import InvalidArgument


class ProductCategory(str, Enum):
    PROPERTY = "Imóvel"
    AUTO = "Auto"
    MOTO = "Moto"
    AGRO = "Agro"
    SERVICES = "Serviços"


def parse_product(raw_product: Any) -> ProductCategory:
    text = str(raw_product).strip()
    for product in ProductCategory:
        if text.lower() in (product.value.lower(), product.name.lower()):
            return product

    raise InvalidArgument(
        f"Produto desconhecido: {raw_product}. "
        f"Valores aceitos: {', '.join(product.value for product in ProductCategory)}."
    )
