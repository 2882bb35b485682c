import re

from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from api.auth.actor import Actor
from api.configurations.config import Settings, current_date, get_settings
from api.services.abstract_service import AbstractService
from common.billing.installment_schedule import (
    add_months,
    coerce_status,
    is_paid,
    resolve_display_status,
)
from common.billing.money import round_money, sum_money
from common.exceptions import InvalidArgument
from common.repositories.commissions.installment import InstallmentRepository
from common.repositories.commissions.sale import SaleRepository
from simple_common.utils import parse_iso_date

MONTH_PATTERN = re.compile(r"\d{4}-\d{2}")


def month_range(month: str) -> Tuple[date, date]:
    """Intervalo ``[primeiro dia do mês, primeiro dia do mês seguinte)``."""
    text = str(month or "").strip()
    if not MONTH_PATTERN.fullmatch(text):
        raise InvalidArgument(
            detail=f"Mês fora do formato AAAA-MM: {month}", code="invalid_month"
        )

    year, month_number = (int(part) for part in text.split("-"))
    if not 1 <= month_number <= 12:
        raise InvalidArgument(detail=f"Mês inválido: {month}", code="invalid_month")

    start = date(year, month_number, 1)

    return start, add_months(start, 1)


def receivable_total(installments: List[Any]) -> Any:
    # boleto atrasado e não pago não entra como recebimento previsto do mês
    return sum_money(
        installment.value
        for installment in installments
        if is_paid(installment) or not installment.bill_overdue
    )


class ReportService(AbstractService):
    def __init__(
        self, settings: Settings = None, today: Callable[[], date] = current_date
    ) -> None:
        super().__init__(today)
        self.__repository = SaleRepository()
        self.__installment_repository = InstallmentRepository()
        self.__settings = settings or get_settings()

    @property
    def _repository(self) -> SaleRepository:
        return self.__repository

    def _sales_window(
        self,
        consultant_id: Optional[int],
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Dict[str, Any]:
        aggregate = self._repository.aggregate(consultant_id, start, end)

        return {
            "sales_count": aggregate["sales_count"],
            "base_total": float(round_money(aggregate["base_total"])),
            "commission_total": float(round_money(aggregate["commission_total"])),
            "credit_total": float(round_money(aggregate["credit_total"])),
        }

    def summary(self, actor: Actor) -> Dict[str, Any]:
        consultant_id = actor.scope_consultant_id()
        today = self._today()
        last7 = today - timedelta(days=6)
        month_start = today.replace(day=1)

        self._logger.debug(
            f"Calculando resumo em {today} para o consultor {consultant_id}."
        )

        return {
            "today": self._sales_window(consultant_id, today, today),
            "last7": self._sales_window(consultant_id, last7, today),
            "month": self._sales_window(consultant_id, month_start, today),
            "all": self._sales_window(consultant_id),
            "installments": self.__installment_repository.count_by_status(
                today, consultant_id
            ),
            "as_of": today,
        }

    def ranking(
        self, start: Optional[str] = None, end: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Total vendido por consultor ativo no período. Retorna apenas valores
        agregados, nunca as vendas individuais.
        """
        try:
            start_date = parse_iso_date(start) or self.__settings.ranking_start
            end_date = parse_iso_date(end) or self.__settings.ranking_end
        except ValueError as error:
            raise InvalidArgument(detail=str(error), code="invalid_date_range")

        if start_date > end_date:
            raise InvalidArgument(
                detail=f"Início {start_date} posterior ao fim {end_date}.",
                code="invalid_date_range",
            )

        rows = self._repository.ranking(start_date, end_date)

        return [
            {
                "consultant_id": row.consultant_id,
                "name": row.name,
                "totalSales": float(round_money(row.total_sales)),
                "salesCount": int(row.sales_count),
            }
            for row in rows
        ]

    def receivables(
        self, actor: Actor, month: str, consultant_id: Optional[str] = None
    ) -> Dict[str, Any]:
        scope_consultant_id = actor.scope_consultant_id()
        if actor.is_admin and consultant_id is not None and str(consultant_id).strip():
            try:
                scope_consultant_id = int(str(consultant_id).strip())
            except ValueError:
                scope_consultant_id = 0

            if scope_consultant_id <= 0:
                raise InvalidArgument(
                    detail=f"Consultor inválido: {consultant_id}",
                    code="invalid_consultant_id",
                )

        start, end = month_range(month)
        rows = self.__installment_repository.due_between(start, end, scope_consultant_id)
        installments = [row[0] for row in rows]
        today = self._today()

        self._logger.debug(
            f"{len(rows)} parcelas com vencimento em {month} "
            f"para o consultor {scope_consultant_id}."
        )

        return {
            "month": str(month).strip(),
            "range": {"start": start, "end": end},
            "count": len(rows),
            "total": float(receivable_total(installments)),
            "installments": [
                {
                    "sale_id": installment.sale_id,
                    "installment_number": installment.number,
                    "value": float(round_money(installment.value)),
                    "due_date": installment.due_date,
                    "status": coerce_status(installment.status).value,
                    "display_status": resolve_display_status(installment, today).value,
                    "bill_overdue": bool(installment.bill_overdue),
                    "paid_date": installment.paid_date,
                    "sale_date": sale_date,
                    "client_name": client_name,
                    "product": product,
                    "consultant_name": consultant_name,
                }
                for installment, sale_date, client_name, product, consultant_name in rows
            ],
        }
