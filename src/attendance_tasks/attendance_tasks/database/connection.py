from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling
from mysql.connector.constants import ClientFlag

logger = logging.getLogger(__name__)

POOL_RETRY_INTERVAL = 0.05


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_name: str = "attendance_tasks"
    pool_size: int = 5
    # seconds to wait for a free pooled connection before giving up
    pool_timeout: float = 5.0


class DatabaseConnection:
    """Process-wide connection pool.

    Created once at startup (see `build_container`) and drained with `close()`
    at shutdown. Repositories borrow a pooled connection per operation;
    closing a pooled connection hands it back to the pool.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=self._config.pool_name,
                pool_size=int(self._config.pool_size),
                pool_reset_session=True,
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                time_zone="+00:00",
                # UPDATE reports matched rows, not changed rows
                client_flags=[ClientFlag.FOUND_ROWS],
            )
            logger.info(
                "Connection pool %s ready (size=%s, %s@%s:%s/%s)",
                self._config.pool_name,
                self._config.pool_size,
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
            )
        return self._pool

    def connect(self):
        """Borrow a pooled connection, waiting up to `pool_timeout` when all are in use.

        `MySQLConnectionPool.get_connection()` fails immediately on an empty
        pool, so more concurrent requests than `pool_size` would otherwise error.
        """
        pool = self._get_pool()
        attempts = int(self._config.pool_timeout / POOL_RETRY_INTERVAL) + 1
        for attempt in range(1, attempts + 1):
            try:
                return pool.get_connection()
            except mysql.connector.errors.PoolError:
                if attempt == attempts:
                    logger.error(
                        "Connection pool %s exhausted after %.1fs (size=%s)",
                        self._config.pool_name,
                        self._config.pool_timeout,
                        self._config.pool_size,
                    )
                    raise
                time.sleep(POOL_RETRY_INTERVAL)

    def close(self) -> None:
        if self._pool is None:
            return
        try:
            # no public drain API on MySQLConnectionPool
            self._pool._remove_connections()
        except mysql.connector.Error:
            logger.exception("Error while draining connection pool")
        finally:
            self._pool = None
            logger.info("Connection pool %s closed", self._config.pool_name)
