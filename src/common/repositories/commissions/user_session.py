from datetime import datetime

from common.repositories.abstract_repository import AbstractRepository
from common.models.commissions import UserSessionModel


class UserSessionRepository(AbstractRepository):
    def __init__(self) -> None:
        super().__init__(UserSessionModel)

    def get_valid(self, token: str, now: datetime) -> UserSessionModel:
        filters = (UserSessionModel.token == token) & (
            UserSessionModel.expires_at > now
        )

        return self.find_one(filters)

    def delete_token(self, token: str) -> int:
        return self.delete_many(UserSessionModel.token == token)
