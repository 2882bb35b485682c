from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, case, func, or_

from common.billing.installment_schedule import InstallmentEntry, InstallmentStatus
from common.repositories.abstract_repository import AbstractRepository
from common.models.commissions import InstallmentModel, SaleModel


class InstallmentRepository(AbstractRepository):
    def __init__(self) -> None:
        super().__init__(InstallmentModel)

    def replace(
        self,
        sale_id: int,
        entries: List[InstallmentEntry],
        commit_at_the_end: bool = True,
    ) -> List[InstallmentModel]:
        self._logger.debug(
            f"Substituindo {len(entries)} parcelas da venda {sale_id}."
        )
        self.delete_many(InstallmentModel.sale_id == sale_id, commit_at_the_end=False)

        return self.create_many(
            [
                {
                    "sale_id": sale_id,
                    "number": entry.number,
                    "value": entry.value,
                    "due_date": entry.due_date,
                    "status": InstallmentStatus(entry.status).value,
                    "bill_overdue": bool(entry.bill_overdue),
                    "paid_date": entry.paid_date,
                }
                for entry in entries
            ],
            commit_at_the_end=commit_at_the_end,
        )

    def count_by_status(
        self, today: date, consultant_id: Optional[int] = None
    ) -> Dict[str, int]:
        paid = or_(
            InstallmentModel.status == InstallmentStatus.PAID.value,
            InstallmentModel.paid_date.isnot(None),
        )
        unpaid = and_(
            InstallmentModel.status != InstallmentStatus.PAID.value,
            InstallmentModel.paid_date.is_(None),
        )

        query = self._session.query(
            func.coalesce(func.sum(case((paid, 1), else_=0)), 0),
            func.coalesce(
                func.sum(case((and_(unpaid, InstallmentModel.due_date < today), 1), else_=0)),
                0,
            ),
            func.coalesce(
                func.sum(case((and_(unpaid, InstallmentModel.due_date >= today), 1), else_=0)),
                0,
            ),
        ).join(SaleModel, SaleModel.id == InstallmentModel.sale_id)

        if consultant_id is not None:
            query = query.filter(SaleModel.consultant_id == consultant_id)

        self._logger.debug(f"A executar query: {self._get_raw_query(query)}")

        paid_count, overdue_count, pending_count = query.one()

        return {
            "paid": int(paid_count),
            "pending": int(pending_count),
            "overdue": int(overdue_count),
        }

    def due_between(
        self, start: date, end: date, consultant_id: Optional[int] = None
    ) -> List[Any]:
        query = (
            self._session.query(
                InstallmentModel,
                SaleModel.sale_date,
                SaleModel.client_name,
                SaleModel.product,
                SaleModel.consultant_name,
            )
            .join(SaleModel, SaleModel.id == InstallmentModel.sale_id)
            .filter(
                (InstallmentModel.due_date >= start) & (InstallmentModel.due_date < end)
            )
        )

        if consultant_id is not None:
            query = query.filter(SaleModel.consultant_id == consultant_id)

        query = query.order_by(
            InstallmentModel.due_date,
            SaleModel.sale_date,
            InstallmentModel.sale_id,
            InstallmentModel.number,
        )

        self._logger.debug(f"A executar query: {self._get_raw_query(query)}")

        return query.all()
