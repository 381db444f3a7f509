"""Database package."""
from .session import create_engine, create_session_factory, get_db_session, init_models
from .stores import SqlDescriptorStore, SqlRecognitionLedger
from .unit_of_work import UnitOfWork, unit_of_work

__all__ = [
    "SqlDescriptorStore",
    "SqlRecognitionLedger",
    "UnitOfWork",
    "create_engine",
    "create_session_factory",
    "get_db_session",
    "init_models",
    "unit_of_work",
]
