"""
Aritmética monetária em centavos.

Todo valor monetário do sistema é um ``Decimal`` quantizado em duas casas,
com arredondamento ROUND_HALF_UP (meio para longe do zero).
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, List

from common.exceptions import InvalidArgument

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"Valor numérico inválido: {value!r}")

    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgument(f"Valor numérico inválido: {value!r}")

    if not number.is_finite():
        raise InvalidArgument(f"Valor numérico não finito: {value!r}")

    return number


def is_finite_number(value: Any) -> bool:
    try:
        to_decimal(value)
    except InvalidArgument:
        return False

    return True


def round_money(value: Any) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Any]) -> Decimal:
    return round_money(sum((to_decimal(value) for value in values), Decimal(0)))


def distribute(total: Any, count: int) -> List[Decimal]:
    """
    Divide ``total`` em ``count`` partes iguais arredondadas, somando o
    resíduo do arredondamento na última parte, de forma que a soma das
    partes seja exatamente ``total``.
    """
    if count < 1:
        raise InvalidArgument(f"Quantidade de partes inválida: {count}")

    total = round_money(total)
    share = round_money(total / count)
    shares = [share] * count
    shares[-1] = round_money(shares[-1] + (total - sum_money(shares)))

    return shares
