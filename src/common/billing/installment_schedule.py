"""
Cronograma de parcelas da comissão de uma venda.

O status persistido de uma parcela é sempre recalculado por ``resolve_status``
antes de cada escrita, tornando durável o atraso automático. A exibição usa
``resolve_display_status``, que acrescenta a marcação de boleto atrasado
sobre o mesmo status resolvido.
"""
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from common.billing.money import ZERO, distribute, round_money, sum_money, to_decimal
from common.exceptions import InvalidArgument

DEFAULT_INSTALLMENTS = 6


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class DisplayStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    BILL_OVERDUE = "bill_overdue"


@dataclass(frozen=True)
class InstallmentEntry:
    number: int
    value: Decimal
    due_date: date
    status: InstallmentStatus = InstallmentStatus.PENDING
    bill_overdue: bool = False
    paid_date: Optional[date] = None


def add_months(start: date, months: int) -> date:
    # relativedelta limita ao último dia do mês de destino, sem virar o mês
    return start + relativedelta(months=months)


def coerce_status(raw_status: Any) -> InstallmentStatus:
    raw_status = getattr(raw_status, "value", raw_status)
    if raw_status in (InstallmentStatus.PAID.value, InstallmentStatus.OVERDUE.value):
        return InstallmentStatus(raw_status)

    return InstallmentStatus.PENDING


def is_paid(entry: Any) -> bool:
    return (
        coerce_status(entry.status) == InstallmentStatus.PAID
        or entry.paid_date is not None
    )


def resolve_status(entry: Any, today: date) -> InstallmentStatus:
    if is_paid(entry):
        return InstallmentStatus.PAID

    if entry.due_date < today:
        return InstallmentStatus.OVERDUE

    return InstallmentStatus.PENDING


def resolve_display_status(entry: Any, today: date) -> DisplayStatus:
    status = resolve_status(entry, today)

    if status != InstallmentStatus.PAID and entry.bill_overdue:
        return DisplayStatus.BILL_OVERDUE

    return DisplayStatus(status.value)


def generate_default(total_commission: Any, sale_date: date) -> List[InstallmentEntry]:
    shares = distribute(total_commission, DEFAULT_INSTALLMENTS)

    return [
        InstallmentEntry(
            number=index + 1,
            value=share,
            due_date=add_months(sale_date, index + 1),
        )
        for index, share in enumerate(shares)
    ]


def _provided_field(provided: Any, field: str) -> Any:
    if isinstance(provided, dict):
        return provided.get(field)

    return getattr(provided, field, None)


def replace_schedule(
    provided: Optional[Sequence[Any]],
    total_commission: Any,
    sale_date: date,
    today: date,
) -> List[InstallmentEntry]:
    """
    Normaliza uma lista de parcelas recebida para substituir integralmente o
    cronograma da venda. Lista vazia gera o cronograma padrão de 6 parcelas.
    """
    if not provided:
        return [
            bake_status(entry, today)
            for entry in generate_default(total_commission, sale_date)
        ]

    ordered = sorted(
        enumerate(provided),
        key=lambda item: (
            _provided_field(item[1], "number") or item[0] + 1,
            item[0],
        ),
    )

    installments = []
    for position, (_, raw) in enumerate(ordered):
        number = position + 1

        raw_value = _provided_field(raw, "value")
        value = ZERO if raw_value is None else round_money(raw_value)
        if value < 0:
            raise InvalidArgument(f"Parcela {number} com valor negativo: {value}.")

        due_date = _provided_field(raw, "due_date") or add_months(sale_date, number)
        entry = InstallmentEntry(
            number=number,
            value=value,
            due_date=due_date,
            status=coerce_status(_provided_field(raw, "status")),
            bill_overdue=bool(_provided_field(raw, "bill_overdue")),
            paid_date=_provided_field(raw, "paid_date"),
        )
        installments.append(bake_status(entry, today))

    return installments


def bake_status(entry: InstallmentEntry, today: date) -> InstallmentEntry:
    status = resolve_status(entry, today)

    if status == InstallmentStatus.PAID:
        return replace(
            entry,
            status=status,
            bill_overdue=False,
            paid_date=entry.paid_date or today,
        )

    return replace(entry, status=status, paid_date=None)


def rescale(
    installments: Sequence[InstallmentEntry],
    old_total: Any,
    new_total: Any,
) -> List[InstallmentEntry]:
    if not installments:
        return []

    old_total = to_decimal(old_total)
    new_total = round_money(new_total)
    factor = new_total / old_total if old_total > 0 else Decimal(1)

    scaled = [
        replace(entry, value=round_money(to_decimal(entry.value) * factor))
        for entry in installments
    ]

    residual = new_total - sum_money(entry.value for entry in scaled)

    # o resíduo entra pela última parcela e volta às anteriores sem negativar
    for index in reversed(range(len(scaled))):
        if not residual:
            break

        entry = scaled[index]
        value = max(round_money(entry.value + residual), ZERO)
        residual -= value - entry.value
        scaled[index] = replace(entry, value=value)

    return scaled


def schedule_total(installments: Sequence[Any]) -> Decimal:
    return sum_money(entry.value for entry in installments)
