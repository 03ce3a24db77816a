import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from synciot.db import db
from synciot.utils.clock import utcnow


class RoverStatus(str, enum.Enum):
    ONLINE = 'online'
    OFFLINE = 'offline'
    ERROR = 'error'


def iso(value):
    return value.isoformat() if value else None


class Rover(db.Model):
    __tablename__ = 'rovers'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default=RoverStatus.OFFLINE.value)  # online, offline, error
    battery = Column(Integer, nullable=False, default=0)  # 0..100
    last_seen = Column(DateTime, default=utcnow)
    owner_id = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relacionamentos
    sensors = relationship("Sensor", back_populates="rover", cascade="all, delete-orphan")
    sensor_logs = relationship("SensorLog", back_populates="rover", cascade="all, delete-orphan")
    commands = relationship("RoverCommand", back_populates="rover", cascade="all, delete-orphan")
    alerts = relationship("Alert", back_populates="rover", cascade="all, delete-orphan")
    owner = relationship("User", back_populates="rovers")

    # A varredura de liveness filtra por (status, last_seen)
    __table_args__ = (
        Index('idx_rovers_status_last_seen', 'status', 'last_seen'),
    )

    @property
    def is_online(self):
        return self.status == RoverStatus.ONLINE.value

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'status': self.status,
            'battery': self.battery,
            'last_seen': iso(self.last_seen),
            'owner_id': self.owner_id,
            'created_at': iso(self.created_at),
            'updated_at': iso(self.updated_at),
        }

    def summary(self):
        return {'id': self.id, 'name': self.name, 'status': self.status, 'battery': self.battery}
