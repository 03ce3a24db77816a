# synciot/utils/errors.py


class SyncIoTError(Exception):
    """Erro de domínio com status HTTP associado."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message}


class NotFoundError(SyncIoTError):
    """Registro referenciado (rover, sensor, alerta) não existe."""

    status_code = 404


class ValidationError(SyncIoTError):
    """Entrada malformada."""

    status_code = 400


class ConflictError(SyncIoTError):
    status_code = 409


class AuthenticationError(SyncIoTError):
    status_code = 401


class StoreUnavailableError(SyncIoTError):
    """Falha transitória de infraestrutura (banco fora do ar, conexão perdida)."""

    status_code = 503
