from common.repositories.abstract_repository import AbstractRepository
from common.models.commissions import UserModel


class UserRepository(AbstractRepository):
    def __init__(self) -> None:
        super().__init__(UserModel)

    def get_by_username(self, username: str) -> UserModel:
        return self.find_one(UserModel.username == username)
