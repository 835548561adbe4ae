"""Translate SQLAlchemy errors into domain persistence errors."""

from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from chanchito.domain.errors import PersistenceError, ReferentialIntegrityError


@contextmanager
def translate_db_errors(action: str):
    """Re-raise database failures of ``action`` as domain errors.

    Raises:
        ReferentialIntegrityError: On constraint violations.
        PersistenceError: On any other SQLAlchemy failure.
    """
    try:
        yield
    except IntegrityError as exc:
        raise ReferentialIntegrityError(f"{action}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise PersistenceError(f"{action}: {exc}") from exc


__all__ = ["translate_db_errors"]
