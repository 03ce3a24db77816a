from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import asc, desc
from sqlalchemy.orm import joinedload

from synciot.models.SensorLog import SensorLog
from synciot.repositories.base_repository import BaseRepository

# Campos ordenáveis; aceita também os nomes camelCase usados pelo frontend
SORTABLE_FIELDS = {
    'temperature': SensorLog.temperature,
    'humidity': SensorLog.humidity,
    'distance': SensorLog.distance,
    'battery': SensorLog.battery,
    'signal_strength': SensorLog.signal_strength,
    'signalStrength': SensorLog.signal_strength,
    'created_at': SensorLog.created_at,
    'createdAt': SensorLog.created_at,
}


@dataclass
class SensorLogFilter:
    rover_id: Optional[int] = None
    temperature_min: Optional[float] = None
    temperature_max: Optional[float] = None
    battery_min: Optional[float] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    search: Optional[str] = None
    # preenchido pela busca por nome antes da consulta
    rover_ids: Optional[Sequence[int]] = None


@dataclass
class SortSpec:
    field: str = 'created_at'
    order: str = 'desc'

    def resolve(self):
        """Coluna e direção efetivas; campo desconhecido cai em created_at desc."""
        column = SORTABLE_FIELDS.get(self.field)
        if column is None:
            return SensorLog.created_at, desc
        return column, (asc if self.order == 'asc' else desc)


class SensorLogRepository(BaseRepository[SensorLog]):

    def __init__(self):
        super().__init__(SensorLog)

    def _apply_filter(self, query, flt: SensorLogFilter):
        if flt.rover_id is not None:
            query = query.filter(SensorLog.rover_id == flt.rover_id)
        if flt.rover_ids is not None:
            query = query.filter(SensorLog.rover_id.in_(list(flt.rover_ids)))
        if flt.temperature_min is not None:
            query = query.filter(SensorLog.temperature >= flt.temperature_min)
        if flt.temperature_max is not None:
            query = query.filter(SensorLog.temperature <= flt.temperature_max)
        if flt.battery_min is not None:
            query = query.filter(SensorLog.battery >= flt.battery_min)
        if flt.date_from is not None:
            query = query.filter(SensorLog.created_at >= flt.date_from)
        if flt.date_to is not None:
            query = query.filter(SensorLog.created_at <= flt.date_to)
        return query

    def query_filtered(self, flt: SensorLogFilter, sort: SortSpec,
                       page: int, limit: int) -> Tuple[List[SensorLog], int]:
        column, direction = sort.resolve()
        query = self._apply_filter(self.db.session.query(SensorLog), flt)
        query = query.options(joinedload(SensorLog.rover)).order_by(direction(column), direction(SensorLog.id))
        return self.paginate(query, page, limit)

    def query_in_window(self, since: datetime, rover_id: Optional[int] = None) -> List[SensorLog]:
        """Registros com created_at >= since, em ordem cronológica."""
        query = self.db.session.query(SensorLog).filter(SensorLog.created_at >= since)
        if rover_id is not None:
            query = query.filter(SensorLog.rover_id == rover_id)
        return query.order_by(SensorLog.created_at.asc(), SensorLog.id.asc()).all()

    def latest(self, rover_id: Optional[int] = None) -> Optional[SensorLog]:
        query = self.db.session.query(SensorLog)
        if rover_id is not None:
            query = query.filter(SensorLog.rover_id == rover_id)
        return query.order_by(SensorLog.created_at.desc(), SensorLog.id.desc()).first()

    def recent_for_rover(self, rover_id: int, limit: int = 10) -> List[SensorLog]:
        return self.db.session.query(SensorLog).filter(
            SensorLog.rover_id == rover_id
        ).order_by(SensorLog.created_at.desc(), SensorLog.id.desc()).limit(limit).all()
