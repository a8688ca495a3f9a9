"""Database module for the portfolio API."""

from portfolio_api.db.base import Base
from portfolio_api.db.session import Database
from portfolio_api.db.executor import BatchQuery, QueryExecutor

__all__ = ["Base", "Database", "BatchQuery", "QueryExecutor"]
