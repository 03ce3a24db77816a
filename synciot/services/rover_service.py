# synciot/services/rover_service.py
import logging
from typing import Any, Dict, List, Mapping

from synciot.models.Command import CommandStatus
from synciot.models.Rover import Rover, RoverStatus
from synciot.repositories.alert_repository import AlertRepository
from synciot.repositories.command_repository import CommandRepository
from synciot.repositories.rover_repository import RoverRepository
from synciot.repositories.sensor_log_repository import SensorLogRepository
from synciot.utils.clock import utcnow
from synciot.utils.decorators.decorators import translate_store_errors
from synciot.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in RoverStatus]


def _battery(value: Any) -> int:
    try:
        battery = int(value)
    except (TypeError, ValueError):
        raise ValidationError("battery must be an integer between 0 and 100")
    if not 0 <= battery <= 100:
        raise ValidationError("battery must be an integer between 0 and 100")
    return battery


class RoverService:

    def __init__(self):
        self.rovers = RoverRepository()
        self.sensor_logs = SensorLogRepository()
        self.commands = CommandRepository()
        self.alerts = AlertRepository()

    @translate_store_errors
    def get_rover(self, rover_id: int) -> Rover:
        rover = self.rovers.get_by_id(rover_id)
        if rover is None:
            raise NotFoundError("Rover not found")
        return rover

    @translate_store_errors
    def list_with_stats(self) -> List[Dict[str, Any]]:
        """Rovers com a última leitura, comandos pendentes e alertas ativos."""
        result = []
        for rover in self.rovers.get_all_newest_first():
            latest = self.sensor_logs.latest(rover.id)
            data = rover.to_dict()
            data.update({
                "latest_sensor": latest.to_dict() if latest else None,
                "pending_commands": sum(1 for c in rover.commands if c.status == CommandStatus.PENDING.value),
                "active_alerts": sum(1 for a in rover.alerts if not a.is_resolved),
                "sensor_count": len(rover.sensors),
            })
            result.append(data)
        return result

    @translate_store_errors
    def get_details(self, rover_id: int) -> Dict[str, Any]:
        rover = self.get_rover(rover_id)
        data = rover.to_dict()
        data.update({
            "sensors": [s.to_dict() for s in sorted(rover.sensors, key=lambda s: s.id)],
            "sensor_logs": [log.to_dict() for log in self.sensor_logs.recent_for_rover(rover.id, 10)],
            "commands": [c.to_dict() for c in self.commands.recent_for_rover(rover.id, 10)],
            "alerts": [a.to_dict() for a in self.alerts.recent_for_rover(rover.id, 5)],
        })
        return data

    @translate_store_errors
    def create_rover(self, payload: Mapping, owner_id: int = None) -> Rover:
        name = payload.get("name")
        if not name or not isinstance(name, str):
            raise ValidationError("Rover name is required")

        status = payload.get("status") or RoverStatus.OFFLINE.value
        if status not in VALID_STATUSES:
            raise ValidationError(f"Invalid status. Valid statuses are: {', '.join(VALID_STATUSES)}")

        rover = Rover(
            name=name,
            status=status,
            battery=_battery(payload.get("battery") or 0),
            last_seen=utcnow(),
            owner_id=owner_id,
        )
        rover = self.rovers.create(rover)
        logger.info("Rover %s (%s) criado", rover.id, rover.name)
        return rover

    @translate_store_errors
    def update_rover(self, rover_id: int, payload: Mapping) -> Rover:
        """Atualização parcial; sempre renova last_seen."""
        rover = self.get_rover(rover_id)

        if payload.get("name"):
            rover.name = payload["name"]
        if payload.get("status"):
            if payload["status"] not in VALID_STATUSES:
                raise ValidationError(f"Invalid status. Valid statuses are: {', '.join(VALID_STATUSES)}")
            rover.status = payload["status"]
        if payload.get("battery") is not None:
            rover.battery = _battery(payload["battery"])
        rover.last_seen = utcnow()

        return self.rovers.update(rover)

    @translate_store_errors
    def delete_rover(self, rover_id: int) -> None:
        """Remove o rover e, em cascata, sensores, leituras, comandos e alertas."""
        if not self.rovers.delete_by_id(rover_id):
            raise NotFoundError("Rover not found")
        logger.info("Rover %s removido", rover_id)
