from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_PASSWORD_HASH_METHOD
from .database.connection import DBConfig, DatabaseConnection
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.gate import AuthGate
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    tasks_repo: TaskRepository

    tokens: TokenService
    auth_gate: AuthGate
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    task_service: TaskService


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    tasks_repo: TaskRepository,
    jwt_secret: str,
    token_lifetime: timedelta,
    password_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    tokens = TokenService(jwt_secret, lifetime=token_lifetime)
    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        tasks_repo=tasks_repo,
        tokens=tokens,
        auth_gate=AuthGate(tokens, users_repo),
        auth_service=AuthService(users_repo, tokens, password_method=password_method),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo),
        task_service=TaskService(tasks_repo),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    token_lifetime: timedelta,
    password_method: str = DEFAULT_PASSWORD_HASH_METHOD,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_name=str(db_config.get("pool_name", "attendance_tasks")),
        pool_size=int(db_config.get("pool_size", 5)),
        pool_timeout=float(db_config.get("pool_timeout", 5.0)),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        jwt_secret=jwt_secret,
        token_lifetime=token_lifetime,
        password_method=password_method,
        conn=conn,
    )
