from typing import List, Optional

from synciot.models.Sensor import Sensor
from synciot.repositories.base_repository import BaseRepository


class SensorRepository(BaseRepository[Sensor]):

    def __init__(self):
        super().__init__(Sensor)

    def find_by_key(self, rover_id: int, name: str, type_: str) -> Optional[Sensor]:
        """Busca o sensor pela chave natural (rover_id, name, type)."""
        return self.db.session.query(Sensor).filter(
            Sensor.rover_id == rover_id,
            Sensor.name == name,
            Sensor.type == type_,
        ).first()

    def list_for_rover(self, rover_id: int) -> List[Sensor]:
        return self.db.session.query(Sensor).filter(
            Sensor.rover_id == rover_id
        ).order_by(Sensor.created_at.desc(), Sensor.id.desc()).all()
