import logging
import math
from dataclasses import dataclass, field, asdict, replace
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from synciot.repositories.rover_repository import RoverRepository
from synciot.repositories.sensor_log_repository import (
    SensorLogFilter,
    SensorLogRepository,
    SortSpec,
)
from synciot.models.SensorLog import SensorLog
from synciot.utils.clock import utcnow
from synciot.utils.decorators.decorators import translate_store_errors

logger = logging.getLogger(__name__)

__all__ = [
    "AggregationService",
    "DailyBucket",
    "Page",
    "SensorLogFilter",
    "SortSpec",
    "SummaryStats",
    "round1",
]


def round1(value: float) -> float:
    """Arredonda para 1 casa decimal, metade para longe do zero (2.25 -> 2.3, -2.25 -> -2.3)."""
    scaled = Decimal(repr(value * 10)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(scaled) / 10


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


@dataclass
class DailyBucket:
    date: str  # YYYY-MM-DD (UTC)
    temperature: float
    humidity: float
    battery: float


@dataclass
class SummaryStats:
    total_readings: int = 0
    avg_temperature: float = 0.0
    avg_humidity: float = 0.0
    avg_distance: float = 0.0
    avg_battery: float = 0.0
    avg_signal_strength: float = 0.0
    min_temperature: float = 0.0
    max_temperature: float = 0.0
    chart_data: List[DailyBucket] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Page:
    items: List[SensorLog]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [log.to_dict(include_rover=True) for log in self.items],
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "pages": self.pages,
            },
        }


class AggregationService:

    def __init__(self):
        self.rovers = RoverRepository()
        self.sensor_logs = SensorLogRepository()

    @translate_store_errors
    def list_filtered(self, flt: SensorLogFilter = None, sort: SortSpec = None,
                      page: int = 1, limit: int = 20) -> Page:
        """
        Lista paginada de leituras históricas com filtros combinados por AND.

        A busca textual é resolvida antes, para o conjunto de rovers cujo nome
        a contém; se nenhum rover casar, o resultado é vazio e as leituras nem
        são consultadas.
        """
        flt = flt or SensorLogFilter()
        sort = sort or SortSpec()
        page = max(int(page or 1), 1)
        limit = max(int(limit or 1), 1)

        if flt.search:
            rover_ids = self.rovers.find_ids_by_name(flt.search)
            if not rover_ids:
                return Page(items=[], page=page, limit=limit, total=0)
            flt = replace(flt, rover_ids=rover_ids)

        items, total = self.sensor_logs.query_filtered(flt, sort, page, limit)
        return Page(items=items, page=page, limit=limit, total=total)

    @translate_store_errors
    def summarize(self, rover_id: Optional[int] = None, window_days: int = 30,
                  now: datetime = None) -> SummaryStats:
        try:
            since = (now or utcnow()) - timedelta(days=window_days)
        except OverflowError:
            # janela maior que o calendário: considera todos os registros
            since = datetime.min
        logs = self.sensor_logs.query_in_window(since, rover_id=rover_id)
        return self.summarize_logs(logs)

    @staticmethod
    def summarize_logs(logs: List[SensorLog]) -> SummaryStats:
        """Médias, extremos de temperatura e série diária (data UTC de created_at)."""
        if not logs:
            return SummaryStats()

        temperatures = [log.temperature for log in logs]

        daily: Dict[str, Dict[str, List[float]]] = {}
        for log in logs:
            day = log.created_at.date().isoformat()
            bucket = daily.setdefault(day, {"temperature": [], "humidity": [], "battery": []})
            bucket["temperature"].append(log.temperature)
            bucket["humidity"].append(log.humidity)
            bucket["battery"].append(log.battery)

        chart_data = [
            DailyBucket(
                date=day,
                temperature=round1(_mean(values["temperature"])),
                humidity=round1(_mean(values["humidity"])),
                battery=round1(_mean(values["battery"])),
            )
            for day, values in sorted(daily.items())
        ]

        return SummaryStats(
            total_readings=len(logs),
            avg_temperature=round1(_mean(temperatures)),
            avg_humidity=round1(_mean([log.humidity for log in logs])),
            avg_distance=round1(_mean([log.distance for log in logs])),
            avg_battery=round1(_mean([log.battery for log in logs])),
            avg_signal_strength=round1(_mean([log.signal_strength for log in logs])),
            min_temperature=round1(min(temperatures)),
            max_temperature=round1(max(temperatures)),
            chart_data=chart_data,
        )
