from dataclasses import dataclass

from fastapi import Query

from app.core.config import settings
from app.db import SessionLocal


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@dataclass
class PageParams:
    page: int
    page_size: int


def get_page_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(
        settings.default_page_size, ge=1, le=1000, description="Number of items per page"
    ),
) -> PageParams:
    return PageParams(page=page, page_size=page_size)
