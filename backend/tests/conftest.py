from __future__ import annotations

import os
from pathlib import Path

import pytest

DB_PATH = Path(__file__).resolve().parent / "test_skitrip.db"
os.environ["DATABASE_URL"] = f"sqlite:///{DB_PATH}"
os.environ.setdefault("LITEAPI_PRIVATE_KEY", "test-key")


@pytest.fixture(scope="session", autouse=True)
def database():
    from skitrip import models  # noqa: F401
    from skitrip.db import Base, engine

    engine.dispose()
    if DB_PATH.exists():
        DB_PATH.unlink()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if DB_PATH.exists():
        DB_PATH.unlink()
