from typing import List

from common.repositories.abstract_repository import AbstractRepository
from common.models.commissions import ConsultantModel


class ConsultantRepository(AbstractRepository):
    def __init__(self) -> None:
        super().__init__(ConsultantModel)

    def get_by_id(self, consultant_id: int) -> ConsultantModel:
        return self.find_one(ConsultantModel.id == consultant_id)

    def find_by_name(self, name: str) -> ConsultantModel:
        return self.find_one(ConsultantModel.name == name)

    def list_all(self) -> List[ConsultantModel]:
        return self.find_many(order_by=[ConsultantModel.name])

    def list_active(self) -> List[ConsultantModel]:
        return self.find_many(
            ConsultantModel.active.is_(True), order_by=[ConsultantModel.name]
        )
