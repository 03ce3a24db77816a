from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func, update

from synciot.models.Rover import Rover, RoverStatus
from synciot.repositories.base_repository import BaseRepository


class RoverRepository(BaseRepository[Rover]):

    def __init__(self):
        super().__init__(Rover)

    def get_all_newest_first(self) -> List[Rover]:
        return self.db.session.query(Rover).order_by(Rover.created_at.desc(), Rover.id.desc()).all()

    def find_ids_by_name(self, search: str) -> List[int]:
        """IDs dos rovers cujo nome contém `search` (sem diferenciar maiúsculas)."""
        rows = self.db.session.query(Rover.id).filter(Rover.name.ilike(f"%{search}%")).all()
        return [row.id for row in rows]

    def mark_stale_offline(self, cutoff: datetime) -> int:
        """
        Marca como offline, num único UPDATE, todos os rovers online cujo
        last_seen é anterior a `cutoff`. Retorna a quantidade afetada.
        """
        stmt = (
            update(Rover)
            .where(Rover.status == RoverStatus.ONLINE.value, Rover.last_seen < cutoff)
            .values(status=RoverStatus.OFFLINE.value)
        )
        result = self.db.session.execute(stmt)
        self.db.session.commit()
        return result.rowcount or 0

    def touch_last_seen(self, rover: Rover, now: datetime, mark_online: bool = False) -> Rover:
        """Atualiza last_seen sem commit (faz parte da transação do chamador)."""
        rover.last_seen = now
        if mark_online:
            rover.status = RoverStatus.ONLINE.value
        return rover

    def count_by_status(self) -> Dict[str, int]:
        rows = self.db.session.query(Rover.status, func.count(Rover.id)).group_by(Rover.status).all()
        counts = {status.value: 0 for status in RoverStatus}
        for status, total in rows:
            counts[status] = total
        return counts

    def average_battery(self) -> Optional[float]:
        return self.db.session.query(func.avg(Rover.battery)).scalar()
