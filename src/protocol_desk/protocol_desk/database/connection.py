from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DB_CONNECT_TIMEOUT_SECONDS, DB_POOL_SIZE
from ..core.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DB_POOL_SIZE
    connect_timeout: int = DB_CONNECT_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(db_config.get("pool_size", DB_POOL_SIZE)),
            connect_timeout=int(db_config.get("connect_timeout", DB_CONNECT_TIMEOUT_SECONDS)),
        )


class DatabaseConnection:
    """Connection factory owned by the application container.

    The underlying pool is opened lazily on the first ``connect()`` and reused
    afterwards; it is safe to share between request threads.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                logger.info(
                    "Opening MySQL pool %s@%s:%s/%s (size=%s)",
                    self._config.user,
                    self._config.host,
                    self._config.port,
                    self._config.database,
                    self._config.pool_size,
                )
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="protocol_desk",
                    pool_size=self._config.pool_size,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    connection_timeout=self._config.connect_timeout,
                )
            return self._pool

    def connect(self):
        try:
            return self._get_pool().get_connection()
        except mysql.connector.Error as e:
            raise TransportError(f"Database unreachable: {e}") from e
