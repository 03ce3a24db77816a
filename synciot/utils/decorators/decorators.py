import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from synciot.db import db
from synciot.utils.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def translate_store_errors(f):
    """
    Converte falhas do SQLAlchemy em StoreUnavailableError, desfazendo a
    transação corrente antes de propagar.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Falha no banco em %s", f.__qualname__)
            raise StoreUnavailableError("Data store unavailable, try again later") from e
    return wrapper
