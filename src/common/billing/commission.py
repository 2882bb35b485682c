from decimal import Decimal
from typing import Any

from common.billing.money import round_money, to_decimal


def calculate_commission(base_value: Any, percentage: Any) -> Decimal:
    """
    Comissão total de uma venda: ``base_value * percentage / 100``,
    arredondada em centavos (ROUND_HALF_UP). Percentual ``0.8`` significa 0,8%.
    """
    return round_money(to_decimal(base_value) * to_decimal(percentage) / 100)
