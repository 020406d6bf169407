"""
FastAPI dependencies for dependency injection.

The link store is built per request around that request's database
session. Tests override get_db (or get_link_store) to swap in their own.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from shortlink_app.database.connection import get_db
from shortlink_app.services.link_store import LinkStore
from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    create_short_code_strategy,
)


@lru_cache()
def get_short_code_strategy() -> ShortCodeStrategy:
    """Short code generator (singleton, it holds no state)"""
    return create_short_code_strategy()


def get_link_store(
    db: Session = Depends(get_db),
    short_code_strategy: ShortCodeStrategy = Depends(get_short_code_strategy),
) -> LinkStore:
    return LinkStore(db=db, short_code_strategy=short_code_strategy)
