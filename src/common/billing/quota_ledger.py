from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Sequence

from common.billing.money import ZERO, round_money, sum_money, to_decimal
from common.exceptions import InvalidArgument

MIN_QUOTAS = 1
MAX_QUOTAS = 50


@dataclass(frozen=True)
class QuotaEntry:
    number: int
    value: Decimal


def clamp_quota_count(count: Any) -> int:
    try:
        count = int(count)
    except (TypeError, ValueError):
        count = MIN_QUOTAS

    return max(MIN_QUOTAS, min(MAX_QUOTAS, count))


def build_ledger(values: Sequence[Any]) -> List[QuotaEntry]:
    """
    Monta a lista de cotas de uma venda, numerada de 1 a N na ordem recebida.
    Substitui integralmente a lista anterior; o valor base da venda deve ser
    recalculado pelo chamador a partir de ``sum_of``.
    """
    if not MIN_QUOTAS <= len(values) <= MAX_QUOTAS:
        raise InvalidArgument(
            f"Quantidade de cotas deve estar entre {MIN_QUOTAS} e {MAX_QUOTAS}, "
            f"recebida: {len(values)}."
        )

    entries = []
    for index, raw_value in enumerate(values):
        value = round_money(raw_value)
        if value < 0:
            raise InvalidArgument(
                f"Cota {index + 1} com valor negativo: {raw_value}."
            )

        entries.append(QuotaEntry(number=index + 1, value=value))

    return entries


def sum_of(values: Iterable[Any]) -> Decimal:
    return sum_money(
        entry.value if isinstance(entry, QuotaEntry) else entry for entry in values
    )


def resize_quotas(values: Sequence[Any], new_count: Any) -> List[Decimal]:
    # identidade da cota é apenas posicional
    new_count = clamp_quota_count(new_count)
    resized = [round_money(value) for value in values[:new_count]]
    resized.extend([ZERO] * (new_count - len(resized)))

    return resized


def quota_values(entries: Iterable[Any]) -> List[Decimal]:
    return [to_decimal(entry.value) for entry in entries]
