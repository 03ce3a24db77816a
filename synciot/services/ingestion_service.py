import enum
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Tuple

from synciot.db import db
from synciot.models.Rover import Rover
from synciot.models.Sensor import Sensor
from synciot.models.SensorLog import SensorLog
from synciot.repositories.rover_repository import RoverRepository
from synciot.repositories.sensor_log_repository import SensorLogRepository
from synciot.repositories.sensor_repository import SensorRepository
from synciot.utils.clock import utcnow
from synciot.utils.decorators.decorators import translate_store_errors
from synciot.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UpsertAction(str, enum.Enum):
    CREATE = 'created'
    UPDATE = 'updated'


@dataclass(frozen=True)
class SensorEntry:
    name: str
    type: str
    value: float
    unit: str


@dataclass
class IngestResult:
    results: List[Tuple[UpsertAction, Sensor]] = field(default_factory=list)
    skipped: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return sum(1 for action, _ in self.results if action is UpsertAction.CREATE)

    @property
    def updated_count(self) -> int:
        return sum(1 for action, _ in self.results if action is UpsertAction.UPDATE)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": len(self.results),
            "created": self.created_count,
            "updated": self.updated_count,
            "skipped": self.skipped_count,
            "skipped_entries": self.skipped,
            "data": [{"action": action.value, "sensor": sensor.to_dict()} for action, sensor in self.results],
        }


def _required_text(entry: Mapping, key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{key}' is required")
    return value


def as_float(value: Any, key: str) -> float:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"'{key}' is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{key}' must be numeric")
    if not math.isfinite(number):
        raise ValidationError(f"'{key}' must be a finite number")
    return number


def parse_sensor_entry(entry: Any) -> SensorEntry:
    """Valida uma entrada {name, type, value, unit}; levanta ValidationError."""
    if not isinstance(entry, Mapping):
        raise ValidationError("Sensor entry must be an object")
    return SensorEntry(
        name=_required_text(entry, "name"),
        type=_required_text(entry, "type"),
        value=as_float(entry.get("value"), "value"),
        unit=_required_text(entry, "unit"),
    )


class IngestionService:
    """Recebe leituras enviadas pelos rovers (valor atual e histórico)."""

    def __init__(self):
        self.rovers = RoverRepository()
        self.sensors = SensorRepository()
        self.sensor_logs = SensorLogRepository()

    def _get_rover(self, rover_id: int) -> Rover:
        rover = self.rovers.get_by_id(rover_id)
        if rover is None:
            raise NotFoundError("Rover not found")
        return rover

    @translate_store_errors
    def ingest_batch(self, rover_id: int, entries: Iterable[Any], now: datetime = None,
                     mark_online: bool = False) -> IngestResult:
        """
        Upsert em lote dos sensores de um rover pela chave (rover_id, name, type).

        Entradas inválidas são puladas e contadas. Rover inexistente aborta o
        lote inteiro com NotFoundError, antes de qualquer escrita. Ao final o
        last_seen do rover é renovado; tudo numa única transação.
        """
        rover = self._get_rover(rover_id)
        now = now or utcnow()
        result = IngestResult()

        for index, raw in enumerate(entries):
            try:
                entry = parse_sensor_entry(raw)
            except ValidationError as e:
                logger.warning("Entrada de sensor ignorada (rover=%s, índice=%s): %s -> %r",
                               rover_id, index, e.message, raw)
                result.skipped.append({"index": index, "reason": e.message})
                continue

            existing = self.sensors.find_by_key(rover.id, entry.name, entry.type)
            if existing is not None:
                existing.value = entry.value
                existing.unit = entry.unit
                existing.updated_at = now
                result.results.append((UpsertAction.UPDATE, existing))
            else:
                created = Sensor(
                    rover_id=rover.id,
                    name=entry.name,
                    type=entry.type,
                    value=entry.value,
                    unit=entry.unit,
                    created_at=now,
                    updated_at=now,
                )
                self.sensors.create(created, commit=False)
                result.results.append((UpsertAction.CREATE, created))

        self.rovers.touch_last_seen(rover, now, mark_online=mark_online)
        db.session.commit()

        logger.info("Lote de sensores processado (rover=%s): %s criado(s), %s atualizado(s), %s ignorado(s)",
                    rover_id, result.created_count, result.updated_count, result.skipped_count)
        return result

    @translate_store_errors
    def record_sensor_log(self, payload: Mapping) -> SensorLog:
        """Cria um registro histórico de leitura (temperatura, umidade, distância...)."""
        rover_id = payload.get("rover_id")
        if rover_id is None or any(payload.get(key) is None for key in ("temperature", "humidity", "distance")):
            raise ValidationError("rover_id, temperature, humidity, and distance are required")

        try:
            rover_id = int(rover_id)
        except (TypeError, ValueError):
            raise ValidationError("rover_id must be an integer")
        rover = self._get_rover(rover_id)

        log = SensorLog(
            rover_id=rover.id,
            temperature=as_float(payload.get("temperature"), "temperature"),
            humidity=as_float(payload.get("humidity"), "humidity"),
            distance=as_float(payload.get("distance"), "distance"),
            battery=_optional_number(payload.get("battery")),
            signal_strength=_optional_number(payload.get("signal_strength")),
        )
        return self.sensor_logs.create(log)


def _optional_number(value: Any, default: float = 0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default
