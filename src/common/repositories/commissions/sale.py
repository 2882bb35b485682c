from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, func

from common.repositories.abstract_repository import AbstractRepository
from common.models.commissions import ConsultantModel, SaleModel


class SaleRepository(AbstractRepository):
    def __init__(self) -> None:
        super().__init__(SaleModel)

    def get_by_id(self, sale_id: int) -> SaleModel:
        return self.find_one(SaleModel.id == sale_id)

    def list_for(self, consultant_id: Optional[int] = None) -> List[SaleModel]:
        filters = None
        if consultant_id is not None:
            filters = SaleModel.consultant_id == consultant_id

        return self.find_many(
            filters, order_by=[SaleModel.sale_date.desc(), SaleModel.id.desc()]
        )

    def aggregate(
        self,
        consultant_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Dict[str, Any]:
        query = self._session.query(
            func.count(SaleModel.id),
            func.coalesce(func.sum(SaleModel.base_value), 0),
            func.coalesce(func.sum(SaleModel.total_commission), 0),
            func.coalesce(func.sum(SaleModel.credit_generated), 0),
        )

        if consultant_id is not None:
            query = query.filter(SaleModel.consultant_id == consultant_id)
        if start is not None:
            query = query.filter(SaleModel.sale_date >= start)
        if end is not None:
            query = query.filter(SaleModel.sale_date <= end)

        self._logger.debug(f"A executar query: {self._get_raw_query(query)}")

        sales_count, base_total, commission_total, credit_total = query.one()

        return {
            "sales_count": int(sales_count),
            "base_total": base_total,
            "commission_total": commission_total,
            "credit_total": credit_total,
        }

    def ranking(self, start: date, end: date) -> List[Any]:
        total_sales = func.coalesce(func.sum(SaleModel.base_value), 0)
        sales_count = func.count(SaleModel.id)

        query = (
            self._session.query(
                ConsultantModel.id.label("consultant_id"),
                ConsultantModel.name.label("name"),
                total_sales.label("total_sales"),
                sales_count.label("sales_count"),
            )
            .outerjoin(
                SaleModel,
                and_(
                    SaleModel.consultant_id == ConsultantModel.id,
                    SaleModel.sale_date >= start,
                    SaleModel.sale_date <= end,
                ),
            )
            .filter(ConsultantModel.active.is_(True))
            .group_by(ConsultantModel.id, ConsultantModel.name)
            .order_by(total_sales.desc(), sales_count.desc(), ConsultantModel.name.asc())
        )

        self._logger.debug(f"A executar query: {self._get_raw_query(query)}")

        return query.all()
