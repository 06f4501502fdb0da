import os
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_prysme.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["TOMBSTONE_SECRET"] = "test-tombstone-secret-min-32-characters-long"
os.environ["TOMBSTONE_LENGTH"] = "11"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from app.main import app
from app.db.models.customer import Customer as CustomerModel
from app.db.models.product import Product as ProductModel
from app.db.models.product import ProductCategory as CategoryModel
from app.db.models.role import Role as RoleModel
from app.db.models.user import User as UserModel

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Create test engine and session with proper SQLite settings
    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,  # Don't use connection pooling for SQLite
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema and seed data
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    try:
        command.upgrade(alembic_cfg, "head")
    except Exception as e:
        print(f"Migration failed: {e}")
        raise

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        try:
            if os.path.exists(test_db_path):
                os.remove(test_db_path)
            # Also remove WAL files
            for suffix in ["-wal", "-shm"]:
                wal_path = f"{test_db_path}{suffix}"
                if os.path.exists(wal_path):
                    os.remove(wal_path)
            if os.path.exists(temp_db_dir):
                os.rmdir(temp_db_dir)
        except OSError as e:
            print(f"Cleanup failed: {e}")


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from app.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


def _user_payload(**overrides) -> dict:
    payload = {
        "first_name": "Ana",
        "last_name": "Silva",
        "email": "ana@example.com",
        "phone_number": "5511999990001",
        "birth_date": "1990-05-17",
        "gender": "F",
        "roles": ["SELLER"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="function")
def make_user_payload():
    """Factory for a complete, valid user creation payload."""
    return _user_payload


@pytest.fixture(scope="function")
def seller_user(db: Session) -> UserModel:
    """Create a seller directly in the database."""
    seller_role = db.query(RoleModel).filter(RoleModel.name == "SELLER").first()
    if not seller_role:
        raise RuntimeError("SELLER role not found")

    user = UserModel(
        first_name="Sam",
        last_name="Seller",
        email="seller@example.com",
        phone_number="5511999990099",
        birth_date=date(1988, 1, 2),
        gender="M",
        deleted=False,
    )
    user.roles = [seller_role]
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def customer(db: Session) -> CustomerModel:
    """Create a customer directly in the database."""
    db_customer = CustomerModel(
        cpf_cnpj="12345678000190",
        name="Acme Ltda",
        trade_name="Acme",
        email="contact@acme.example.com",
        phone_numbers=["551130000000"],
        deleted=False,
    )
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


@pytest.fixture(scope="function")
def category(db: Session) -> CategoryModel:
    db_category = CategoryModel(name="Hardware")
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


@pytest.fixture(scope="function")
def product(db: Session, category: CategoryModel) -> ProductModel:
    db_product = ProductModel(
        name="Drill",
        description="Cordless drill",
        price=Decimal("150.00"),
        stock=Decimal("10"),
        category_id=category.id,
        active=True,
    )
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product
