from abc import abstractmethod, ABCMeta
from datetime import date
from typing import Callable

from api.configurations.config import current_date
from common.repositories.abstract_repository import AbstractRepository
from simple_common.logger import logger


class AbstractService(metaclass=ABCMeta):
    def __init__(self, today: Callable[[], date] = current_date) -> None:
        self._today = today
        self._logger = logger

    @property
    @abstractmethod
    def _repository(self) -> AbstractRepository:
        pass  # pragma: no cover
