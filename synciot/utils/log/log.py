import logging
import json
from datetime import datetime
from datetime import timezone


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "evento": record.getMessage(),
        }
        if record.exc_info:
            log_obj["excecao"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, ensure_ascii=False)


def setup_logger(level=logging.INFO):
    logger = logging.getLogger()
    if not logger.hasHandlers():  # só adiciona se ainda não tiver handlers
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.setLevel(level)
        logger.addHandler(handler)
    return logger
