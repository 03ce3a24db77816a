from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from synciot.db import db
from synciot.models.Rover import iso
from synciot.utils.clock import utcnow


class Sensor(db.Model):
    """Valor atual de um sensor do rover (snapshot, não histórico)."""

    __tablename__ = 'sensors'

    id = Column(Integer, primary_key=True)
    rover_id = Column(Integer, ForeignKey('rovers.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)  # temperature, humidity, distance, battery...
    value = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False)  # °C, %, cm
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    rover = relationship("Rover", back_populates="sensors")

    # Chave natural usada no upsert em lote
    __table_args__ = (
        Index('idx_sensors_rover_name_type', 'rover_id', 'name', 'type'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'rover_id': self.rover_id,
            'name': self.name,
            'type': self.type,
            'value': self.value,
            'unit': self.unit,
            'created_at': iso(self.created_at),
            'updated_at': iso(self.updated_at),
        }
