"""Helper utilities shared across API route handlers."""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from campushub.infrastructure.store import RowNotFoundError, StoreError, UnknownTableError

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(not_found: str = "Not found") -> Iterator[None]:
    """Map store and use case exceptions raised in the block to HTTP errors."""

    try:
        yield
    except RowNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found) from exc
    except UnknownTableError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StoreError as exc:
        logger.warning("Store request failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
