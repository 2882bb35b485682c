from contextlib import contextmanager
from datetime import datetime

from sqlalchemy.orm import declarative_base, scoped_session
from sqlalchemy.sql.elements import BooleanClauseList, BinaryExpression
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.query import Query
from typing import Iterator, List, Union, Dict, Any, Type
from common.database.session import db_session
from common.exceptions import EntityNotFound, InternalServerError, Conflict
from simple_common.logger import logger


class AbstractRepository:
    def __init__(self, model: Type[declarative_base]) -> None:
        self._model = model
        self._session: scoped_session = db_session
        self._logger = logger

    @classmethod
    def _get_raw_query(cls, query: Query) -> str:
        return str(query.statement)

    def get_model_name(self) -> str:
        return self._model.__tablename__

    def find_one(
        self, filters: Union[BooleanClauseList, BinaryExpression]
    ) -> declarative_base:
        query = self._session.query(self._model).filter(filters)

        self._logger.debug(f"A executar query: {self._get_raw_query(query)}")

        item = query.first()

        if item is None:
            self._logger.debug(
                f"Query não recuperou nenhum item "
                f"da entidade {self.get_model_name()}."
            )
            raise EntityNotFound(
                detail="nenhum item encontrado ao realizar query na entidade."
            )

        self._logger.debug(
            f"Query recuperou um item com sucesso, "
            f"da entidade {self.get_model_name()}."
        )

        return item

    def find_many(
        self,
        filters: Union[BooleanClauseList, BinaryExpression] = None,
        order_by: List[Any] = None,
    ) -> List[declarative_base]:
        query = self._session.query(self._model)
        if filters is not None:
            query = query.filter(filters)
        if order_by:
            query = query.order_by(*order_by)

        self._logger.debug(f"A executar query: {self._get_raw_query(query)}")

        items = query.all()

        self._logger.debug(
            f"Query recuperou {len(items)} items, "
            f"da entidade {self.get_model_name()}."
        )

        return items

    def refresh(self, entity: declarative_base) -> declarative_base:
        self._session.refresh(entity)
        return entity

    def flush_and_commit(
        self, new_entity: declarative_base = None, commit_at_the_end: bool = True
    ) -> None:
        try:
            if new_entity is not None:
                self._session.add(new_entity)

            self._session.flush()
        except IntegrityError as exception1:
            self._session.rollback()
            conflict = Conflict(
                detail="Erro de integridade ao tentar criar/atualizar a entidade.",
                headers={
                    "entity": self.get_model_name(),
                    "integrity_error": str(exception1.orig),
                },
            )

            self._logger.exception(f"{conflict.detail}\n{conflict.headers}")
            raise conflict
        except Exception as exception2:
            self._session.rollback()
            internal_error = InternalServerError(
                detail="Comportamento inesperado ao tentar criar/atualizar a entidade.",
                headers={
                    "entity": self.get_model_name(),
                    "generic_error": str(exception2),
                },
            )

            self._logger.exception(f"{internal_error.detail}\n{internal_error.headers}")
            raise internal_error

        if commit_at_the_end:
            self._session.commit()

    def create(
        self, attributes: Dict[str, Any], commit_at_the_end: bool = True
    ) -> declarative_base:
        new_entity = self._model(**attributes)

        self._logger.debug(
            f"A executar Inserção da entidade "
            f"{self.get_model_name()}, com atributos: {attributes}"
        )

        self.flush_and_commit(new_entity, commit_at_the_end)

        self._logger.debug(f"Entidade {self.get_model_name()} inserida com sucesso.")

        return new_entity

    def create_many(
        self, entities: List[Dict[str, Any]], commit_at_the_end: bool = True
    ) -> List[declarative_base]:
        self._logger.debug(
            f"A executar inserção em batch de {len(entities)} entidades "
            f"{self.get_model_name()}."
        )

        new_entities = [self._model(**attributes) for attributes in entities]
        self._session.add_all(new_entities)
        self.flush_and_commit(commit_at_the_end=commit_at_the_end)

        self._logger.debug(
            f"Volume de {len(entities)} entidades "
            f"{self.get_model_name()} inserido com sucesso!"
        )

        return new_entities

    def update_entity(
        self,
        entity: declarative_base,
        attributes: Dict[str, Any],
        commit_at_the_end: bool = True,
    ) -> declarative_base:
        self._logger.debug(
            f"Atualizando entidade {self.get_model_name()} "
            f"com atributos: {attributes}"
        )

        for column, value in attributes.items():
            setattr(entity, column, value)

        if hasattr(entity, "modified_at"):
            setattr(entity, "modified_at", datetime.now())

        self.flush_and_commit(commit_at_the_end=commit_at_the_end)

        return entity

    def delete_many(
        self,
        filters: Union[BooleanClauseList, BinaryExpression],
        commit_at_the_end: bool = True,
    ) -> int:
        query = self._session.query(self._model).filter(filters)

        self._logger.debug(
            f"A executar remoção de entidades {self.get_model_name()}: "
            f"{self._get_raw_query(query)}"
        )

        try:
            deleted = query.delete()
        except Exception as exception:
            self._session.rollback()
            internal_error = InternalServerError(
                detail="Comportamento inesperado ao tentar remover entidades.",
                headers={
                    "entity": self.get_model_name(),
                    "generic_error": str(exception),
                },
            )

            self._logger.exception(f"{internal_error.detail}\n{internal_error.headers}")
            raise internal_error

        self.flush_and_commit(commit_at_the_end=commit_at_the_end)

        self._logger.debug(
            f"{deleted} entidades {self.get_model_name()} removidas com sucesso."
        )

        return deleted

    def delete(
        self, entity: declarative_base, commit_at_the_end: bool = True
    ) -> None:
        self._logger.debug(f"A executar remoção da entidade {self.get_model_name()}.")

        self._session.delete(entity)
        self.flush_and_commit(commit_at_the_end=commit_at_the_end)

    @contextmanager
    def transaction(self) -> Iterator[scoped_session]:
        try:
            yield self._session
            self._session.commit()
        except Exception:
            self._logger.debug(
                f"Desfazendo transação iniciada por {self.get_model_name()}."
            )
            self._session.rollback()
            raise
