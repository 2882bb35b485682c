from typing import List

from common.billing.quota_ledger import QuotaEntry
from common.repositories.abstract_repository import AbstractRepository
from common.models.commissions import SaleQuotaModel


class SaleQuotaRepository(AbstractRepository):
    def __init__(self) -> None:
        super().__init__(SaleQuotaModel)

    def replace(
        self, sale_id: int, entries: List[QuotaEntry], commit_at_the_end: bool = True
    ) -> List[SaleQuotaModel]:
        self._logger.debug(
            f"Substituindo {len(entries)} cotas da venda {sale_id}."
        )
        self.delete_many(SaleQuotaModel.sale_id == sale_id, commit_at_the_end=False)

        return self.create_many(
            [
                {"sale_id": sale_id, "number": entry.number, "value": entry.value}
                for entry in entries
            ],
            commit_at_the_end=commit_at_the_end,
        )
