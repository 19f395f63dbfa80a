# Entity base model and mapper
from .base import (
    SimpleDBEntity,
    build_entity,
)

# Pagination
from .page import Page

__all__ = [
    "SimpleDBEntity",
    "build_entity",
    "Page",
]
