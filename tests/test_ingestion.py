# tests/test_ingestion.py
from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from synciot.db import db
from synciot.models import Rover, Sensor, SensorLog
from synciot.services.ingestion_service import IngestionService, UpsertAction, parse_sensor_entry
from synciot.utils.errors import NotFoundError, StoreUnavailableError, ValidationError


@pytest.fixture
def service(app):
    return IngestionService()


def _sensors(rover_id):
    return db.session.query(Sensor).filter(Sensor.rover_id == rover_id).all()


def test_first_batch_creates_reading(service, make_rover):
    rover = make_rover()

    result = service.ingest_batch(rover.id, [{"name": "temp", "type": "c", "value": 10, "unit": "C"}])

    assert result.created_count == 1
    assert result.updated_count == 0
    assert result.skipped_count == 0
    sensors = _sensors(rover.id)
    assert len(sensors) == 1
    assert sensors[0].value == 10.0


def test_second_batch_updates_same_record(service, make_rover, now):
    rover = make_rover()
    service.ingest_batch(rover.id, [{"name": "temp", "type": "c", "value": 10, "unit": "C"}], now=now)
    original_id = _sensors(rover.id)[0].id

    later = now + timedelta(seconds=5)
    result = service.ingest_batch(rover.id, [{"name": "temp", "type": "c", "value": 12, "unit": "F"}], now=later)

    assert result.updated_count == 1
    assert result.results[0][0] is UpsertAction.UPDATE
    sensors = _sensors(rover.id)
    assert len(sensors) == 1
    assert sensors[0].id == original_id
    assert sensors[0].value == 12.0
    assert sensors[0].unit == "F"
    assert sensors[0].updated_at == later


def test_distinct_keys_accumulate(service, make_rover):
    rover = make_rover()
    service.ingest_batch(rover.id, [
        {"name": "temp", "type": "temperature", "value": 21, "unit": "C"},
        {"name": "hum", "type": "humidity", "value": 40, "unit": "%"},
    ])
    service.ingest_batch(rover.id, [
        {"name": "temp", "type": "temperature", "value": 22, "unit": "C"},
        {"name": "front", "type": "distance", "value": 150, "unit": "cm"},
        # mesmo nome, tipo diferente: outra chave
        {"name": "temp", "type": "ambient", "value": 19, "unit": "C"},
    ])

    keys = {(s.name, s.type) for s in _sensors(rover.id)}
    assert keys == {("temp", "temperature"), ("hum", "humidity"), ("front", "distance"), ("temp", "ambient")}


def test_keys_are_scoped_per_rover(service, make_rover):
    alpha = make_rover("Alpha")
    beta = make_rover("Beta")
    entry = {"name": "temp", "type": "c", "value": 10, "unit": "C"}

    service.ingest_batch(alpha.id, [entry])
    result = service.ingest_batch(beta.id, [entry])

    assert result.created_count == 1
    assert len(_sensors(alpha.id)) == 1
    assert len(_sensors(beta.id)) == 1


def test_invalid_entries_are_skipped(service, make_rover):
    rover = make_rover()

    result = service.ingest_batch(rover.id, [
        {"type": "c", "value": 1, "unit": "C"},                  # sem name
        {"name": "a", "type": "c", "value": 1, "unit": ""},      # unit vazia
        {"name": "b", "type": "c", "unit": "C"},                 # sem value
        {"name": "c", "type": "c", "value": "abc", "unit": "C"},  # value não numérico
        "not-an-object",
        {"name": "ok", "type": "c", "value": "3.5", "unit": "C"},
    ])

    assert result.skipped_count == 5
    assert [s["index"] for s in result.skipped] == [0, 1, 2, 3, 4]
    assert result.created_count == 1
    assert [s.name for s in _sensors(rover.id)] == ["ok"]
    assert _sensors(rover.id)[0].value == 3.5


def test_zero_is_a_valid_value(service, make_rover):
    rover = make_rover()
    result = service.ingest_batch(rover.id, [{"name": "dist", "type": "cm", "value": 0, "unit": "cm"}])
    assert result.created_count == 1


def test_batch_refreshes_last_seen_without_changing_status(service, make_rover, now):
    rover = make_rover(status="offline", seen_ago=3600)

    service.ingest_batch(rover.id, [{"name": "bad"}], now=now)

    db.session.expire_all()
    refreshed = db.session.get(Rover, rover.id)
    assert refreshed.last_seen == now
    assert refreshed.status == "offline"


def test_mark_online_reasserts_status(service, make_rover, now):
    rover = make_rover(status="offline", seen_ago=3600)

    service.ingest_batch(rover.id, [], now=now, mark_online=True)

    db.session.expire_all()
    assert db.session.get(Rover, rover.id).status == "online"


def test_unknown_rover_fails_without_side_effects(service, make_rover):
    other = make_rover("Other", seen_ago=60)
    last_seen = other.last_seen

    with pytest.raises(NotFoundError):
        service.ingest_batch(9999, [{"name": "temp", "type": "c", "value": 10, "unit": "C"}])

    db.session.expire_all()
    assert db.session.query(Sensor).count() == 0
    assert db.session.get(Rover, other.id).last_seen == last_seen


def test_store_failure_rolls_back_batch(service, make_rover):
    rover = make_rover()
    error = OperationalError("SELECT", {}, Exception("server closed the connection"))

    with patch.object(service.sensors, "find_by_key", side_effect=[None, error]):
        with pytest.raises(StoreUnavailableError):
            service.ingest_batch(rover.id, [
                {"name": "a", "type": "c", "value": 1, "unit": "C"},
                {"name": "b", "type": "c", "value": 2, "unit": "C"},
            ])

    assert db.session.query(Sensor).count() == 0


def test_result_serialization(service, make_rover):
    rover = make_rover()
    result = service.ingest_batch(rover.id, [
        {"name": "temp", "type": "c", "value": 10, "unit": "C"},
        {"name": ""},
    ])

    data = result.to_dict()
    assert data["count"] == 1
    assert data["created"] == 1
    assert data["skipped"] == 1
    assert data["data"][0]["action"] == "created"
    assert data["data"][0]["sensor"]["name"] == "temp"


def test_parse_sensor_entry_rejects_booleans():
    with pytest.raises(ValidationError):
        parse_sensor_entry({"name": "a", "type": "b", "value": True, "unit": "c"})


def test_record_sensor_log(service, make_rover):
    rover = make_rover()

    log = service.record_sensor_log({"rover_id": str(rover.id), "temperature": 21.5,
                                     "humidity": 40, "distance": "12"})

    assert log.id is not None
    assert log.distance == 12.0
    assert log.battery == 0
    assert log.signal_strength == 0
    assert db.session.query(SensorLog).count() == 1


def test_record_sensor_log_requires_fields(service, make_rover):
    rover = make_rover()
    with pytest.raises(ValidationError):
        service.record_sensor_log({"rover_id": rover.id, "temperature": 20})


def test_record_sensor_log_unknown_rover(service):
    with pytest.raises(NotFoundError):
        service.record_sensor_log({"rover_id": 42, "temperature": 20, "humidity": 1, "distance": 1})


def test_non_finite_values_are_skipped_in_batch(service, make_rover):
    rover = make_rover()

    result = service.ingest_batch(rover.id, [
        {"name": "t", "type": "c", "value": "inf", "unit": "C"},
        {"name": "h", "type": "c", "value": float("nan"), "unit": "%"},
        {"name": "d", "type": "c", "value": "-Infinity", "unit": "cm"},
        {"name": "ok", "type": "c", "value": 1, "unit": "C"},
    ])

    assert result.skipped_count == 3
    assert all("finite" in s["reason"] for s in result.skipped)
    assert [s.name for s in _sensors(rover.id)] == ["ok"]


@pytest.mark.parametrize("field", ["temperature", "humidity", "distance"])
def test_record_sensor_log_rejects_non_finite(service, make_rover, field):
    rover = make_rover()
    payload = {"rover_id": rover.id, "temperature": 20, "humidity": 1, "distance": 1}
    payload[field] = "inf"

    with pytest.raises(ValidationError):
        service.record_sensor_log(payload)
    assert db.session.query(SensorLog).count() == 0


def test_record_sensor_log_ignores_non_finite_optional_fields(service, make_rover):
    rover = make_rover()

    log = service.record_sensor_log({"rover_id": rover.id, "temperature": 20, "humidity": 1,
                                     "distance": 1, "battery": "nan", "signal_strength": "inf"})

    assert log.battery == 0
    assert log.signal_strength == 0
