from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from synciot.db import db
from synciot.models.Rover import iso
from synciot.utils.clock import utcnow


class SensorLog(db.Model):
    __tablename__ = 'sensor_logs'

    id = Column(Integer, primary_key=True)
    rover_id = Column(Integer, ForeignKey('rovers.id', ondelete='CASCADE'), nullable=False)
    temperature = Column(Float, nullable=False)
    humidity = Column(Float, nullable=False)
    distance = Column(Float, nullable=False)
    battery = Column(Float, nullable=False, default=0)
    signal_strength = Column(Float, nullable=False, default=0)  # dBm
    created_at = Column(DateTime, default=utcnow, nullable=False)

    rover = relationship("Rover", back_populates="sensor_logs")

    # Índices para consultas time-series
    __table_args__ = (
        Index('idx_sensor_logs_rover_created', 'rover_id', 'created_at'),
        Index('idx_sensor_logs_created', 'created_at'),
    )

    def to_dict(self, include_rover=False):
        data = {
            'id': self.id,
            'rover_id': self.rover_id,
            'temperature': self.temperature,
            'humidity': self.humidity,
            'distance': self.distance,
            'battery': self.battery,
            'signal_strength': self.signal_strength,
            'created_at': iso(self.created_at),
        }
        if include_rover and self.rover is not None:
            data['rover'] = self.rover.summary()
        return data
