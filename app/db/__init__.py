from app.db.base import Base, SessionLocal, engine
from app.db.transaction import transaction

__all__ = ["Base", "SessionLocal", "engine", "transaction"]
