import threading

from contextvars import ContextVar
from typing import Any, List, Dict, Optional, Type, Tuple
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.orm.decl_api import DeclarativeMeta

from simple_common.utils import get_all_class_instances
from common import database
from common.database.connection import AbstractConnection
from simple_common.logger import logger

request_scope: ContextVar[Optional[str]] = ContextVar("request_scope", default=None)


def session_scope() -> Any:
    # cada requisição tem sua sessão; fora delas, uma por thread
    return request_scope.get() or threading.get_ident()


class SessionLocal:
    def __init__(self) -> None:
        self.__connection_module = database.__name__
        self.__engines_by_base: Dict[Type[DeclarativeMeta], Engine] = {}

        self.__logger = logger

    @property
    def engines_by_base(self) -> Dict[Type[DeclarativeMeta], Engine]:
        return self.__engines_by_base.copy()

    def create(self) -> Tuple[scoped_session, Dict[Type[DeclarativeMeta], Engine]]:
        connection_instances: List[AbstractConnection] = get_all_class_instances(
            self.__connection_module
        )

        for connection_object in connection_instances:
            options = connection_object.engine_options()
            engine = create_engine(**options)

            self.__engines_by_base[connection_object.base_class] = engine

            self.__logger.debug(
                f"Criado objeto de conexão com banco "
                f"{connection_object.connection_name} ({engine.dialect.name})"
            )

        session = scoped_session(
            sessionmaker(autocommit=False, autoflush=False, binds=self.__engines_by_base),
            scopefunc=session_scope,
        )
        return session, self.engines_by_base


db_session, engines_by_base = SessionLocal().create()


def create_tables() -> None:
    for base, engine in engines_by_base.items():
        base.metadata.create_all(bind=engine)

        logger.debug(
            f"Tabelas garantidas no banco {engine.dialect.name}: "
            f"{sorted(base.metadata.tables)}"
        )


def drop_tables() -> None:
    db_session.remove()

    for base, engine in engines_by_base.items():
        base.metadata.drop_all(bind=engine)
