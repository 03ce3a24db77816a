import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from synciot.db import db
from synciot.models.Rover import iso
from synciot.utils.clock import utcnow

VALID_COMMANDS = ('forward', 'backward', 'left', 'right', 'stop')


class CommandStatus(str, enum.Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'


class RoverCommand(db.Model):
    __tablename__ = 'rover_commands'

    id = Column(Integer, primary_key=True)
    rover_id = Column(Integer, ForeignKey('rovers.id', ondelete='CASCADE'), nullable=False)
    command = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=CommandStatus.PENDING.value)
    created_at = Column(DateTime, default=utcnow, index=True)
    executed_at = Column(DateTime)

    rover = relationship("Rover", back_populates="commands")

    def to_dict(self):
        return {
            'id': self.id,
            'rover_id': self.rover_id,
            'command': self.command,
            'status': self.status,
            'created_at': iso(self.created_at),
            'executed_at': iso(self.executed_at),
        }
