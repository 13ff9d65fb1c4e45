import asyncio

import pytest
from fastapi.testclient import TestClient

from rims.database import Database
from rims.main import create_app
from rims.repositories.registry import Repositories
from rims.storage import MemoryStore


def open_database(store):
    db = Database(store)
    asyncio.run(db.initialize())
    return db


@pytest.fixture()
def open_db():
    return open_database


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def db(store):
    database = open_database(store)
    yield database
    database.close()


@pytest.fixture()
def repos(db):
    return Repositories(db)


@pytest.fixture()
def make_item(repos):
    def _make(name="Widget", **fields):
        return repos.items.create({"name": name, **fields})

    return _make


@pytest.fixture()
def client(store):
    app = create_app(Database(store), seed=False)
    with TestClient(app) as c:
        yield c
