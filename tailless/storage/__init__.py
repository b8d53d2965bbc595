"""Storage module for database operations."""

from tailless.storage.db import Base, close_engine, create_tables, get_db, get_engine, get_session_factory
from tailless.storage.json_utils import dump_str_list, load_str_list
from tailless.storage.models import Moment, Session, Space, User
from tailless.storage.query import AnyOf, Equals, Prefix, Query
from tailless.storage.repo_moments import MomentsRepo
from tailless.storage.repo_sessions import SessionsRepo
from tailless.storage.repo_spaces import SpacesRepo
from tailless.storage.repo_users import UsersRepo

__all__ = [
    # Database
    "Base",
    "get_engine",
    "get_session_factory",
    "get_db",
    "create_tables",
    "close_engine",
    # JSON utilities
    "dump_str_list",
    "load_str_list",
    # Models
    "User",
    "Space",
    "Moment",
    "Session",
    # Queries
    "Query",
    "Equals",
    "Prefix",
    "AnyOf",
    # Repositories
    "UsersRepo",
    "SpacesRepo",
    "MomentsRepo",
    "SessionsRepo",
]
