import os
import sys
from datetime import date

import pytest

# Ensure the project root (containing the `league` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("SECRET_KEY", "test-secret")

from league import create_app, db  # noqa: E402
from league.services import league_service  # noqa: E402


@pytest.fixture()
def flask_app():
    application = create_app("testing")
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def roster(flask_app):
    """Three bowlers and an open first week"""
    alice = league_service.create_bowler({"name": "Alice", "nickname": "Al"})
    bob = league_service.create_bowler({"name": "Bob"})
    carol = league_service.create_bowler({"name": "Carol"})
    week = league_service.create_week(1, date(2024, 1, 10))
    return {
        "alice": alice.id,
        "bob": bob.id,
        "carol": carol.id,
        "week": week.id,
    }
