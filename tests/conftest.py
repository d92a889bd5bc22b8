import pytest

from swipe_engine import database
from tests.helpers import run


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite store per test."""
    run(database.init_db(reset=True, sqlite_path=str(tmp_path / "swipes.sqlite3")))
    yield
    run(database.close_db())
