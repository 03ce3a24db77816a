# tests/conftest.py
from datetime import timedelta

import pytest

from config import TestingConfig
from synciot.app import create_app
from synciot.db import db
from synciot.models import Rover, SensorLog, User, UserRole
from synciot.services.auth_service import AuthService
from synciot.utils.clock import utcnow


@pytest.fixture(scope="function")
def app():
    """Cria uma app limpa por teste com DB em memória."""
    application = create_app(TestingConfig)

    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """Cliente de teste isolado por teste."""
    return app.test_client()


@pytest.fixture(scope="function")
def runner(app):
    return app.test_cli_runner()


@pytest.fixture(scope="function")
def now():
    return utcnow().replace(microsecond=0)


@pytest.fixture(scope="function")
def new_user(app):
    user = User(email="operator@example.com", name="Operator", role=UserRole.OPERATOR)
    user.set_password("testpassword")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(scope="function")
def auth_headers(new_user):
    return {"Authorization": f"Bearer {AuthService.generate_token(new_user)}"}


@pytest.fixture(scope="function")
def make_rover(app, now):
    """Fábrica de rovers persistidos."""

    def _make(name="Rover Alpha", status="online", battery=80, seen_ago=0):
        rover = Rover(name=name, status=status, battery=battery,
                      last_seen=now - timedelta(seconds=seen_ago))
        db.session.add(rover)
        db.session.commit()
        return rover

    return _make


@pytest.fixture(scope="function")
def make_log(app):
    """Fábrica de leituras históricas."""

    def _make(rover, created_at, temperature=20.0, humidity=50.0, distance=10.0,
              battery=80.0, signal_strength=-60.0):
        log = SensorLog(rover_id=rover.id, temperature=temperature, humidity=humidity,
                        distance=distance, battery=battery, signal_strength=signal_strength,
                        created_at=created_at)
        db.session.add(log)
        db.session.commit()
        return log

    return _make
