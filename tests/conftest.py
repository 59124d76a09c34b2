from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from namecontest import create_app
from namecontest.extensions import db
from namecontest.models import ContestSettings, NameVote, Suggestion, User
from namecontest.services.contest import ContestConfig


def make_config(**overrides):
    values = {
        "phase": "Nominations",
        "star_budgets": {5: 2, 4: 3},
        "max_suggestions_per_person": 3,
    }
    values.update(overrides)
    return ContestConfig(**values)


def make_suggestion(name, gender, suggester, guess="girl", relation="Friend", meaning=None):
    return Suggestion(
        name=name,
        gender=gender,
        suggester=suggester,
        guess=guess,
        relation=relation,
        meaning=meaning,
    )


def make_vote(name, gender, voter, score):
    return NameVote(name=name, gender=gender, voter=voter, score=score)


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
            "CONTEST_STAR_BUDGETS": "5:2,4:3",
            "CONTEST_MAX_SUGGESTIONS": 3,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def admin_user(db_session):
    user = User(
        username="admin1",
        email="admin1@example.com",
        password_hash="hashed-password",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def auth_client(client, admin_user):
    with client.session_transaction() as session:
        session["_user_id"] = str(admin_user.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def contest_settings(db_session):
    settings = ContestSettings(
        phase="Nominations",
        star_budgets="5:2,4:3",
        parent_weight=1.0,
        max_suggestions_per_person=3,
        actual_gender="Unknown",
        normalization=False,
        ranking_score="bayesian",
    )
    db_session.add(settings)
    db_session.commit()
    return settings


@pytest.fixture()
def set_phase(db_session, contest_settings):
    def _set_phase(phase, **changes):
        contest_settings.phase = phase
        for field, value in changes.items():
            setattr(contest_settings, field, value)
        db_session.commit()

    return _set_phase


def join(client, identity):
    response = client.post("/join", json={"identity": identity})
    assert response.status_code == 200
    return response.get_json()
