import pytest

from db import init_db, get_session
from main import create_app
from tests import factories


@pytest.fixture
def db_url(tmp_path):
    """File-backed SQLite so lookups on worker threads see the same data."""
    return f"sqlite:///{tmp_path / 'harnessdb-test.sqlite'}"


@pytest.fixture
def app(db_url):
    """Return a Flask app bound to a fresh database."""
    app = create_app(db_url)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def session(db_url, request):
    """Open session with all factories bound to it."""
    if "app" in request.fixturenames:
        request.getfixturevalue("app")
    else:
        init_db(db_url)
    s = get_session()
    for f in factories.ALL:
        f._meta.sqlalchemy_session = s
    yield s
    s.close()
