from abc import abstractmethod
from fastapi_restful import Resource
from typing import List
from fastapi import Security

from api.auth.auth_bearer import current_actor


class AbstractResource(Resource):
    def __init__(self) -> None:
        self._dependencies = [Security(current_actor)]

    @abstractmethod
    def path(self) -> str:
        pass  # pragma: no cover

    @abstractmethod
    def tags(self) -> List[str]:
        pass  # pragma: no cover

    @property
    def dependencies(self) -> List[Security]:
        return self._dependencies


class PublicResource(AbstractResource):
    def __init__(self) -> None:
        super().__init__()
        self._dependencies = []
