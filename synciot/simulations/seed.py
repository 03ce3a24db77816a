# synciot/simulations/seed.py
import logging
import random
from datetime import timedelta

import click
from flask.cli import with_appcontext

from synciot.db import db
from synciot.models import Alert, Rover, RoverCommand, Sensor, SensorLog, User, UserRole
from synciot.utils.clock import utcnow

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"


def _generate_logs(rover_id, now, rng, days=30):
    """Três leituras por dia (6h, 14h, 22h) nos últimos `days` dias."""
    base = (now - timedelta(days=days)).replace(hour=0, minute=0, second=0, microsecond=0)
    logs = []
    for day in range(days):
        for reading in range(3):
            created_at = base + timedelta(days=day, hours=6 + reading * 8, minutes=rng.randint(0, 59))
            logs.append(SensorLog(
                rover_id=rover_id,
                temperature=20 + rng.random() * 15,      # 20-35 °C
                humidity=40 + rng.random() * 40,         # 40-80 %
                distance=5 + rng.random() * 45,          # 5-50 m
                battery=max(10, 100 - day * 2 - rng.random() * 10),
                signal_strength=-40 - rng.random() * 50,  # -40 a -90 dBm
                created_at=created_at,
            ))
    return logs


def seed_demo_data(rng: random.Random = None):
    """Apaga os dados de frota e recria rovers, leituras, comandos e alertas de demonstração."""
    rng = rng or random.Random()
    now = utcnow()
    db.create_all()

    for model in (Alert, RoverCommand, SensorLog, Sensor, Rover):
        db.session.query(model).delete()
    db.session.commit()

    user = db.session.query(User).filter(User.email == DEMO_EMAIL).first()
    if user is None:
        user = User(email=DEMO_EMAIL, name="Demo User", role=UserRole.OPERATOR)
        user.set_password(DEMO_PASSWORD)
        db.session.add(user)
        db.session.flush()

    alpha = Rover(name="Rover Alpha", status="online", battery=85, last_seen=now, owner_id=user.id)
    beta = Rover(name="Rover Beta", status="online", battery=62,
                 last_seen=now - timedelta(minutes=5), owner_id=user.id)
    gamma = Rover(name="Rover Gamma", status="offline", battery=15,
                  last_seen=now - timedelta(hours=1), owner_id=user.id)
    db.session.add_all([alpha, beta, gamma])
    db.session.flush()

    total_logs = 0
    for rover in (alpha, beta, gamma):
        logs = _generate_logs(rover.id, now, rng)
        db.session.add_all(logs)
        total_logs += len(logs)

    db.session.add_all([
        Sensor(rover_id=alpha.id, name="Temperature Sensor", type="temperature", value=22.5, unit="°C"),
        Sensor(rover_id=alpha.id, name="Humidity Sensor", type="humidity", value=45, unit="%"),
        Sensor(rover_id=alpha.id, name="Distance Sensor Front", type="distance", value=150, unit="cm"),
        Sensor(rover_id=beta.id, name="Battery Monitor", type="battery", value=62, unit="%"),
    ])

    db.session.add_all([
        RoverCommand(rover_id=alpha.id, command="forward", status="completed",
                     created_at=now - timedelta(hours=2), executed_at=now - timedelta(seconds=7100)),
        RoverCommand(rover_id=alpha.id, command="left", status="completed",
                     created_at=now - timedelta(seconds=6000), executed_at=now - timedelta(seconds=5950)),
        RoverCommand(rover_id=alpha.id, command="stop", status="pending", created_at=now - timedelta(minutes=1)),
        RoverCommand(rover_id=beta.id, command="backward", status="pending", created_at=now - timedelta(minutes=2)),
        RoverCommand(rover_id=gamma.id, command="forward", status="failed", created_at=now - timedelta(hours=1)),
    ])

    db.session.add_all([
        Alert(rover_id=gamma.id, type="low_battery", severity="critical",
              message="Battery level critically low (15%)", created_at=now - timedelta(minutes=30)),
        Alert(rover_id=gamma.id, type="connection_lost", severity="warning",
              message="Connection lost for more than 30 seconds", created_at=now - timedelta(hours=1)),
        Alert(rover_id=alpha.id, type="obstacle_detected", severity="info",
              message="Obstacle detected at 12cm", is_resolved=True,
              resolved_at=now - timedelta(hours=3), created_at=now - timedelta(hours=4)),
        Alert(rover_id=beta.id, type="high_temperature", severity="warning",
              message="Temperature above 34°C", created_at=now - timedelta(hours=6)),
    ])

    db.session.commit()
    logger.info("Seed concluído: 3 rovers, %s leituras", total_logs)
    return {"rovers": 3, "sensor_logs": total_logs}


@click.command("seed")
@click.option("--random-seed", type=int, default=None, help="Semente para dados reprodutíveis.")
@with_appcontext
def seed_command(random_seed):
    """Popula o banco com dados de demonstração."""
    result = seed_demo_data(random.Random(random_seed))
    click.echo(f"Seeded {result['rovers']} rovers and {result['sensor_logs']} sensor logs")
