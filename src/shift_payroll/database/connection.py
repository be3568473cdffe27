from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "payroll_db")),
        )


class DatabaseConnection:
    """Connection factory shared by the MySQL repositories.

    Note: Each repository call opens a short-lived connection.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
