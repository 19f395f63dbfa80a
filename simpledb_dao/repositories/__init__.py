from .base import SimpleDBDAO, create_dao

__all__ = [
    "SimpleDBDAO",
    "create_dao",
]
