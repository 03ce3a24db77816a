# tests/test_seed.py
from synciot.db import db
from synciot.models import Alert, Rover, RoverCommand, SensorLog, User


def test_seed_command(runner):
    result = runner.invoke(args=["seed", "--random-seed", "1"])

    assert result.exit_code == 0
    assert "Seeded 3 rovers and 270 sensor logs" in result.output
    assert db.session.query(Rover).count() == 3
    assert db.session.query(SensorLog).count() == 270
    assert db.session.query(RoverCommand).count() == 5
    assert db.session.query(Alert).count() == 4


def test_seed_is_repeatable(runner):
    runner.invoke(args=["seed"])
    runner.invoke(args=["seed"])

    assert db.session.query(Rover).count() == 3
    assert db.session.query(User).filter(User.email == "demo@example.com").count() == 1
