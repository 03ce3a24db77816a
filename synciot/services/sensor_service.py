import logging
from typing import List, Mapping

from synciot.models.Sensor import Sensor
from synciot.repositories.rover_repository import RoverRepository
from synciot.repositories.sensor_repository import SensorRepository
from synciot.services.ingestion_service import parse_sensor_entry, as_float
from synciot.utils.decorators.decorators import translate_store_errors
from synciot.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class SensorService:
    """CRUD dos sensores (valor atual) de um rover."""

    def __init__(self):
        self.sensors = SensorRepository()
        self.rovers = RoverRepository()

    def _ensure_rover(self, rover_id: int):
        if self.rovers.get_by_id(rover_id) is None:
            raise NotFoundError("Rover not found")

    @translate_store_errors
    def list_sensors(self, rover_id: int) -> List[Sensor]:
        self._ensure_rover(rover_id)
        return self.sensors.list_for_rover(rover_id)

    @translate_store_errors
    def get_sensor(self, sensor_id: int) -> Sensor:
        sensor = self.sensors.get_by_id(sensor_id)
        if sensor is None:
            raise NotFoundError("Sensor not found")
        return sensor

    @translate_store_errors
    def add_sensor(self, rover_id: int, payload: Mapping) -> Sensor:
        try:
            entry = parse_sensor_entry(payload)
        except ValidationError:
            raise ValidationError("Name, type, value, and unit are required")
        self._ensure_rover(rover_id)

        sensor = Sensor(rover_id=rover_id, name=entry.name, type=entry.type,
                        value=entry.value, unit=entry.unit)
        return self.sensors.create(sensor)

    @translate_store_errors
    def update_sensor(self, sensor_id: int, payload: Mapping) -> Sensor:
        sensor = self.get_sensor(sensor_id)
        for key in ("name", "type", "unit"):
            if payload.get(key):
                setattr(sensor, key, payload[key])
        if payload.get("value") is not None:
            sensor.value = as_float(payload["value"], "value")
        return self.sensors.update(sensor)

    @translate_store_errors
    def delete_sensor(self, sensor_id: int) -> None:
        if not self.sensors.delete_by_id(sensor_id):
            raise NotFoundError("Sensor not found")
