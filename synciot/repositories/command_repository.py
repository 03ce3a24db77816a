from datetime import datetime
from typing import List

from synciot.models.Command import RoverCommand
from synciot.repositories.base_repository import BaseRepository


class CommandRepository(BaseRepository[RoverCommand]):

    def __init__(self):
        super().__init__(RoverCommand)

    def count_between(self, start: datetime, end: datetime) -> int:
        """Comandos com start <= created_at < end"""
        return self.count(RoverCommand.created_at >= start, RoverCommand.created_at < end)

    def recent_for_rover(self, rover_id: int, limit: int = 10) -> List[RoverCommand]:
        return self.db.session.query(RoverCommand).filter(
            RoverCommand.rover_id == rover_id
        ).order_by(RoverCommand.created_at.desc(), RoverCommand.id.desc()).limit(limit).all()
