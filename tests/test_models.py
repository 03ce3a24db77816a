# tests/test_models.py
from synciot.db import db
from synciot.models import Rover, Sensor, SensorLog, User, UserRole


def test_user_password_hashing(app):
    user = User(email="hash@example.com", name="Hash")
    user.set_password("s3cret")

    assert user.password_hash != "s3cret"
    assert user.check_password("s3cret") is True
    assert user.check_password("wrong") is False


def test_user_defaults(app):
    user = User(email="default@example.com", name="Default")
    user.set_password("x")
    db.session.add(user)
    db.session.commit()

    assert user.role == UserRole.OPERATOR
    assert user.is_active is True
    assert user.is_admin is False
    assert user.to_dict()["role"] == "operator"


def test_admin_flag(app):
    assert User(role=UserRole.ADMIN).is_admin is True


def test_rover_defaults(app):
    rover = Rover(name="Fresh")
    db.session.add(rover)
    db.session.commit()

    assert rover.status == "offline"
    assert rover.battery == 0
    assert rover.is_online is False
    assert rover.last_seen is not None
    assert rover.to_dict()["last_seen"] == rover.last_seen.isoformat()


def test_rover_cascade_delete(app, make_rover, make_log, now):
    rover = make_rover()
    make_log(rover, now)
    db.session.add(Sensor(rover_id=rover.id, name="t", type="temperature", value=1, unit="C"))
    db.session.commit()

    db.session.delete(rover)
    db.session.commit()

    assert db.session.query(Sensor).count() == 0
    assert db.session.query(SensorLog).count() == 0


def test_sensor_log_to_dict_includes_rover(app, make_rover, make_log, now):
    rover = make_rover("Rover Beta")
    log = make_log(rover, now)

    data = log.to_dict(include_rover=True)

    assert data["rover"]["name"] == "Rover Beta"
    assert data["created_at"] == now.isoformat()
    assert "rover" not in log.to_dict()
