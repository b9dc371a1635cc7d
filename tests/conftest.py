from datetime import date

import pytest

from tablebook.app import create_app
from tablebook.catalog import build_catalog
from tablebook.domain import CustomerInfo, MealPeriod
from tablebook.extensions import db
from tablebook.store.memory import MemoryStore

SMALL_FLOOR = {
    "TABLE_CAPACITIES": [2, 4, 10],
    "LUNCH_SLOTS": ["11:30-12:30", "12:30-13:30"],
    "DINNER_ROUNDS": [("D1", "19:30-21:00"), ("D2", "21:00-22:30")],
}

DAY = date(2024, 6, 1)


def guest(name: str = "Ada Lovelace") -> CustomerInfo:
    return CustomerInfo(name=name, email=f"{name.split()[0].lower()}@example.com", phone="555-0100")


@pytest.fixture
def catalog():
    return build_catalog(SMALL_FLOOR)


@pytest.fixture
def slot(catalog):
    return catalog.slot_key(DAY, MealPeriod.DINNER, "D1")


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'tablebook.db'}",
        "STORE_BACKEND": "sql",
        "STORE_TIMEOUT": 5.0,
        **SMALL_FLOOR,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_store(app):
    with app.app_context():
        yield app.extensions["tablebook.store"]


@pytest.fixture(params=["memory", "sql"])
def store(request, catalog):
    """Each contract test runs against both store implementations."""
    if request.param == "memory":
        yield MemoryStore(catalog, timeout=5.0)
    else:
        yield request.getfixturevalue("sql_store")
