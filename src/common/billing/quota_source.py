"""
Formatos aceitos na entrada para as cotas de uma venda.

Uma venda pode chegar com a lista explícita de valores das cotas, com o
formato legado uniforme (quantidade de cotas + valor unitário) ou apenas com
o valor base (dados anteriores à lista de cotas). Os três são normalizados
imediatamente para a lista canônica de valores do livro de cotas.
"""
from abc import ABCMeta, abstractmethod
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from common.billing.money import ZERO, round_money
from common.billing.quota_ledger import clamp_quota_count
from common.exceptions import InvalidArgument


class QuotaSource(metaclass=ABCMeta):
    @abstractmethod
    def values(self) -> List[Decimal]:
        pass  # pragma: no cover


class ExplicitQuotas(QuotaSource):
    def __init__(self, values: Sequence[Any]) -> None:
        self.__values = list(values)

    def values(self) -> List[Decimal]:
        normalized = []
        for raw_value in self.__values:
            value = raw_value.get("value") if isinstance(raw_value, dict) else raw_value
            value = getattr(value, "value", value)
            value = round_money(value)
            if value < 0:
                raise InvalidArgument(f"Cota com valor negativo: {value}.")

            normalized.append(value)

        return normalized


class UniformQuotas(QuotaSource):
    def __init__(self, count: Any, unit_value: Any) -> None:
        self.__count = clamp_quota_count(1 if count is None else count)
        self.__unit_value = ZERO if unit_value is None else unit_value

    def values(self) -> List[Decimal]:
        unit_value = round_money(self.__unit_value)
        if unit_value < 0:
            raise InvalidArgument(f"Valor unitário negativo: {unit_value}.")

        return [unit_value] * self.__count


class SingleBaseValue(QuotaSource):
    def __init__(self, base_value: Any) -> None:
        self.__base_value = base_value

    def values(self) -> List[Decimal]:
        base_value = round_money(self.__base_value)
        if base_value < 0:
            raise InvalidArgument(f"Valor base negativo: {base_value}.")

        return [base_value]


def quota_source_from(
    quotas_values: Optional[Sequence[Any]] = None,
    quotas: Any = None,
    unit_value: Any = None,
    base_value: Any = None,
) -> QuotaSource:
    if quotas_values:
        return ExplicitQuotas(quotas_values)

    if quotas is None and unit_value is None and base_value is not None:
        return SingleBaseValue(base_value)

    return UniformQuotas(quotas, unit_value)
