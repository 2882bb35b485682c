import os

from abc import abstractmethod, ABCMeta
from typing import Any, Dict, Type
from psycopg2 import connect as connect_postgres
from sqlalchemy.orm.decl_api import DeclarativeMeta
from sqlalchemy.orm import declarative_base


Base = declarative_base()


def resolve_dialect() -> str:
    explicit = os.environ.get("DB_DIALECT", "").strip().lower()
    if explicit in ("postgres", "postgresql", "pg"):
        return "postgres"
    if explicit in ("sqlite", "sqlite3"):
        return "sqlite"

    if os.environ.get("DATABASE_URL") or os.environ.get("PGHOST"):
        return "postgres"

    return "sqlite"


class AbstractConnection(metaclass=ABCMeta):
    def __init__(
        self,
        base_class: Type[DeclarativeMeta],
        connection_name: str,
        driver: str,
    ) -> None:
        self._base_class = base_class
        self.__connection_name = connection_name
        self._driver = driver

    @property
    def connection_name(self) -> str:
        return self.__connection_name

    @property
    def driver(self) -> str:
        return self._driver

    @property
    def base_class(self) -> Type[DeclarativeMeta]:
        return self._base_class

    @abstractmethod
    def engine_options(self) -> Dict[str, Any]:
        pass  # pragma: no cover


class PostgresDBConnection(AbstractConnection):
    def __init__(
        self,
        user_env_var: str,
        password_env_var: str,
        host_env_var: str,
        port_env_var: str,
        database_env_var: str,
        base_class: Type[DeclarativeMeta],
        connection_name: str,
    ) -> None:
        super().__init__(base_class, connection_name, "postgresql+psycopg2://")
        self._user_env_var = user_env_var
        self._password_env_var = password_env_var
        self._host_env_var = host_env_var
        self._port_env_var = port_env_var
        self._database_env_var = database_env_var

    def get_connection(self):
        database_url = os.environ.get("DATABASE_URL")
        if database_url:
            return connect_postgres(database_url)

        return connect_postgres(
            user=os.environ[self._user_env_var],
            password=os.environ[self._password_env_var],
            host=os.environ[self._host_env_var],
            port=os.environ[self._port_env_var],
            dbname=os.environ[self._database_env_var],
        )

    def engine_options(self) -> Dict[str, Any]:
        return {
            "url": self.driver,
            "creator": self.get_connection,
            "pool_size": int(os.environ.get("PGPOOL_MAX", 10)),
            "max_overflow": 0,
            "pool_pre_ping": True,
        }


class SQLiteDBConnection(AbstractConnection):
    def __init__(
        self,
        file_env_var: str,
        base_class: Type[DeclarativeMeta],
        connection_name: str,
    ) -> None:
        super().__init__(base_class, connection_name, "sqlite+pysqlite:///")
        self._file_env_var = file_env_var

    @property
    def database_file(self) -> str:
        return os.environ.get(self._file_env_var, "data.sqlite")

    def engine_options(self) -> Dict[str, Any]:
        return {
            "url": f"{self.driver}{self.database_file}",
            "connect_args": {"check_same_thread": False},
        }


class CommissionsConnection:
    """
    Conexão do banco de comissões. Usa Postgres quando configurado pelas
    variáveis de ambiente e SQLite em arquivo local nos demais casos.
    """

    def __new__(cls) -> AbstractConnection:
        if resolve_dialect() == "postgres":
            return PostgresDBConnection(
                "PGUSER",
                "PGPASSWORD",
                "PGHOST",
                "PGPORT",
                "PGDATABASE",
                Base,
                "commissions",
            )

        return SQLiteDBConnection("DB_FILE", Base, "commissions")
