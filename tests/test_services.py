# tests/test_services.py
from datetime import timedelta

import pytest

from synciot.db import db
from synciot.models import Alert, Rover, RoverCommand, Sensor, SensorLog
from synciot.services.alert_service import AlertService
from synciot.services.command_service import CommandService
from synciot.services.dashboard_service import DashboardService
from synciot.services.rover_service import RoverService
from synciot.services.sensor_service import SensorService
from synciot.utils.errors import ConflictError, NotFoundError, ValidationError


# -------------------------
# Alertas
# -------------------------
def test_create_and_resolve_alert(app, make_rover):
    rover = make_rover()
    service = AlertService()

    alert = service.create_alert({"rover_id": rover.id, "type": "low_battery",
                                  "severity": "warning", "message": "Battery at 12%"})
    assert alert.is_resolved is False
    assert alert.resolved_at is None

    resolved = service.resolve_alert(alert.id)
    assert resolved.is_resolved is True
    first_resolution = resolved.resolved_at
    assert first_resolution is not None

    with pytest.raises(ConflictError):
        service.resolve_alert(alert.id)
    assert db.session.get(Alert, alert.id).resolved_at == first_resolution


@pytest.mark.parametrize("payload", [
    {"type": "low_battery", "severity": "warning", "message": "x"},
    {"rover_id": 1, "type": "meteor_strike", "severity": "warning", "message": "x"},
    {"rover_id": 1, "type": "low_battery", "severity": "apocalyptic", "message": "x"},
])
def test_create_alert_validation(app, make_rover, payload):
    make_rover()
    with pytest.raises(ValidationError):
        AlertService().create_alert(payload)


def test_create_alert_unknown_rover(app):
    with pytest.raises(NotFoundError):
        AlertService().create_alert({"rover_id": 7, "type": "low_battery",
                                     "severity": "info", "message": "x"})


def test_list_alerts_filters_and_paginates(app, make_rover, now):
    alpha = make_rover("Alpha")
    beta = make_rover("Beta")
    db.session.add_all([
        Alert(rover_id=alpha.id, type="low_battery", severity="critical", message="a",
              created_at=now - timedelta(minutes=3)),
        Alert(rover_id=alpha.id, type="low_battery", severity="warning", message="b",
              created_at=now - timedelta(minutes=2)),
        Alert(rover_id=beta.id, type="high_temperature", severity="critical", message="c",
              is_resolved=True, resolved_at=now, created_at=now - timedelta(minutes=1)),
    ])
    db.session.commit()
    service = AlertService()

    critical = service.list_alerts(severity="critical")
    assert [a["message"] for a in critical["data"]] == ["c", "a"]

    open_alpha = service.list_alerts(is_resolved=False, rover_id=alpha.id, limit=1)
    assert open_alpha["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}
    assert open_alpha["data"][0]["message"] == "b"

    # severidade inválida é ignorada
    assert service.list_alerts(severity="bogus")["pagination"]["total"] == 3


def test_get_alert_not_found(app):
    with pytest.raises(NotFoundError):
        AlertService().get_alert(123)


# -------------------------
# Comandos
# -------------------------
def test_send_command_to_online_rover(app, make_rover):
    rover = make_rover(status="online")

    cmd = CommandService().send_command(rover.id, "FORWARD")

    assert cmd.command == "forward"
    assert cmd.status == "pending"
    assert db.session.query(RoverCommand).count() == 1


def test_send_command_rejects_offline_rover(app, make_rover):
    rover = make_rover(status="offline")
    with pytest.raises(ConflictError):
        CommandService().send_command(rover.id, "stop")


def test_send_command_validation(app, make_rover):
    rover = make_rover()
    service = CommandService()
    with pytest.raises(ValidationError):
        service.send_command(rover.id, "")
    with pytest.raises(ValidationError):
        service.send_command(rover.id, "jump")
    with pytest.raises(NotFoundError):
        service.send_command(999, "stop")


# -------------------------
# Rovers e sensores
# -------------------------
def test_create_rover_defaults(app):
    rover = RoverService().create_rover({"name": "Rover Delta"})

    assert rover.status == "offline"
    assert rover.battery == 0
    assert rover.last_seen is not None


@pytest.mark.parametrize("payload", [{}, {"name": "X", "status": "sleeping"}, {"name": "X", "battery": 150}])
def test_create_rover_validation(app, payload):
    with pytest.raises(ValidationError):
        RoverService().create_rover(payload)


def test_update_rover_is_partial(app, make_rover):
    rover = make_rover("Old name", status="offline", battery=40, seen_ago=600)
    before = rover.last_seen

    updated = RoverService().update_rover(rover.id, {"status": "online"})

    assert updated.name == "Old name"
    assert updated.status == "online"
    assert updated.battery == 40
    assert updated.last_seen > before


def test_delete_rover_cascades(app, make_rover, make_log, now):
    rover = make_rover()
    make_log(rover, now)
    db.session.add_all([
        Sensor(rover_id=rover.id, name="t", type="c", value=1, unit="C"),
        RoverCommand(rover_id=rover.id, command="stop"),
        Alert(rover_id=rover.id, type="low_battery", severity="info", message="m"),
    ])
    db.session.commit()

    RoverService().delete_rover(rover.id)

    assert db.session.query(Rover).count() == 0
    for model in (Sensor, SensorLog, RoverCommand, Alert):
        assert db.session.query(model).count() == 0

    with pytest.raises(NotFoundError):
        RoverService().delete_rover(rover.id)


def test_list_with_stats(app, make_rover, make_log, now):
    rover = make_rover()
    make_log(rover, now - timedelta(hours=1), temperature=10)
    make_log(rover, now, temperature=11)
    db.session.add_all([
        RoverCommand(rover_id=rover.id, command="stop", status="pending"),
        RoverCommand(rover_id=rover.id, command="left", status="completed"),
        Alert(rover_id=rover.id, type="low_battery", severity="info", message="m"),
    ])
    db.session.commit()

    [data] = RoverService().list_with_stats()

    assert data["latest_sensor"]["temperature"] == 11
    assert data["pending_commands"] == 1
    assert data["active_alerts"] == 1


def test_sensor_crud(app, make_rover):
    rover = make_rover()
    service = SensorService()

    sensor = service.add_sensor(rover.id, {"name": "Front", "type": "distance", "value": "150", "unit": "cm"})
    assert sensor.value == 150.0

    service.update_sensor(sensor.id, {"value": 90, "name": ""})
    assert service.get_sensor(sensor.id).value == 90.0
    assert service.get_sensor(sensor.id).name == "Front"

    assert [s.id for s in service.list_sensors(rover.id)] == [sensor.id]

    service.delete_sensor(sensor.id)
    with pytest.raises(NotFoundError):
        service.get_sensor(sensor.id)


def test_add_sensor_validation(app, make_rover):
    rover = make_rover()
    with pytest.raises(ValidationError):
        SensorService().add_sensor(rover.id, {"name": "Front", "type": "distance"})
    with pytest.raises(NotFoundError):
        SensorService().add_sensor(404, {"name": "a", "type": "b", "value": 1, "unit": "c"})


# -------------------------
# Dashboard
# -------------------------
def test_dashboard_stats(app, make_rover, make_log, now):
    alpha = make_rover("Alpha", status="online", battery=80)
    make_rover("Beta", status="offline", battery=61)
    make_rover("Gamma", status="error", battery=10)
    make_log(alpha, now - timedelta(minutes=5), temperature=22)
    db.session.add_all([
        RoverCommand(rover_id=alpha.id, command="stop", status="pending", created_at=now),
        RoverCommand(rover_id=alpha.id, command="left", status="completed",
                     created_at=now - timedelta(days=2)),
        RoverCommand(rover_id=alpha.id, command="left", status="failed",
                     created_at=now - timedelta(days=30)),
        Alert(rover_id=alpha.id, type="low_battery", severity="critical", message="m"),
        Alert(rover_id=alpha.id, type="low_battery", severity="info", message="n",
              is_resolved=True, resolved_at=now),
    ])
    db.session.commit()

    stats = DashboardService().stats(now=now)

    assert stats["overview"]["total_rovers"] == 3
    assert stats["overview"]["active_rovers"] == 1
    assert stats["overview"]["avg_battery"] == 50.3
    assert stats["overview"]["connectivity"] == {"online": 1, "offline": 1, "error": 1, "total": 3}
    assert stats["overview"]["total_readings"] == 1
    assert stats["commands"]["total"] == 3
    assert stats["commands"]["pending"] == 1
    assert stats["commands"]["completed"] == 1
    last_7 = stats["commands"]["last_7_days"]
    assert len(last_7) == 7
    assert last_7[-1] == {"date": now.date().isoformat(), "count": 1}
    assert sum(day["count"] for day in last_7) == 2
    assert stats["alerts"]["active"] == 1
    assert stats["alerts"]["resolved"] == 1
    assert len(stats["alerts"]["critical"]) == 1
    assert stats["latest_reading"]["temperature"] == 22


def test_update_sensor_rejects_non_finite_value(app, make_rover):
    rover = make_rover()
    service = SensorService()
    sensor = service.add_sensor(rover.id, {"name": "Front", "type": "distance", "value": 10, "unit": "cm"})

    with pytest.raises(ValidationError):
        service.update_sensor(sensor.id, {"value": "nan"})
    db.session.expire_all()
    assert service.get_sensor(sensor.id).value == 10.0
