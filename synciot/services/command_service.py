import logging
from typing import List

from synciot.models.Command import RoverCommand, CommandStatus, VALID_COMMANDS
from synciot.repositories.command_repository import CommandRepository
from synciot.repositories.rover_repository import RoverRepository
from synciot.utils.decorators.decorators import translate_store_errors
from synciot.utils.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CommandService:

    def __init__(self):
        self.commands = CommandRepository()
        self.rovers = RoverRepository()

    @translate_store_errors
    def send_command(self, rover_id: int, command: str) -> RoverCommand:
        """Registra um comando pendente para um rover online."""
        if not command or not isinstance(command, str):
            raise ValidationError("Command is required")

        command = command.lower()
        if command not in VALID_COMMANDS:
            raise ValidationError(f"Invalid command. Valid commands are: {', '.join(VALID_COMMANDS)}")

        rover = self.rovers.get_by_id(rover_id)
        if rover is None:
            raise NotFoundError("Rover not found")
        if not rover.is_online:
            raise ConflictError("Rover is not online")

        cmd = self.commands.create(
            RoverCommand(rover_id=rover.id, command=command, status=CommandStatus.PENDING.value)
        )
        logger.info("Comando '%s' enviado para rover %s", command, rover.id)
        return cmd

    @translate_store_errors
    def list_for_rover(self, rover_id: int, limit: int = 10) -> List[RoverCommand]:
        if self.rovers.get_by_id(rover_id) is None:
            raise NotFoundError("Rover not found")
        return self.commands.recent_for_rover(rover_id, limit)
