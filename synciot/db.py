# synciot/db.py
import logging
import time

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

db = SQLAlchemy()


def wait_for_store(retries: int = 5, backoff: float = 0.5) -> None:
    """
    Verifica a conexão com o banco (SELECT 1) com backoff exponencial.
    Deve ser chamada dentro de um app context. Levanta a última exceção
    se todas as tentativas falharem.
    """
    delay = backoff
    for attempt in range(1, retries + 1):
        try:
            db.session.execute(text("SELECT 1"))
            db.session.rollback()
            logger.info("Banco de dados conectado (tentativa %s)", attempt)
            return
        except SQLAlchemyError:
            db.session.rollback()
            if attempt == retries:
                logger.error("Banco de dados indisponível após %s tentativas", retries)
                raise
            logger.warning("Falha ao conectar ao banco (tentativa %s/%s); nova tentativa em %.1fs",
                           attempt, retries, delay)
            time.sleep(delay)
            delay *= 2


def close_store() -> None:
    """Libera as conexões do pool. Chamar no desligamento, dentro do app context."""
    db.session.remove()
    db.engine.dispose()
    logger.info("Conexões com o banco encerradas")
