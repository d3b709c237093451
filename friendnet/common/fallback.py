# friendnet/common/fallback.py

import logging
from typing import Callable, TypeVar

from fastapi import Response
from sqlalchemy.exc import SQLAlchemyError

from friendnet.core.config import settings
from friendnet.core.errors import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATA_SOURCE_HEADER = "X-Data-Source"


def read_with_fallback(fetch: Callable[[], T], mock: Callable[[], T], response: Response, error_message: str) -> T:
    """
    Run a read against the database. On a database error either serve mock
    data (MOCK_FALLBACK on, response tagged ``X-Data-Source: mock``) or fail
    with a 500 carrying ``error_message`` (logged by the ApiError handler).
    """
    try:
        return fetch()
    except SQLAlchemyError as exc:
        if not settings.MOCK_FALLBACK:
            raise ApiError(error_message) from exc
        logger.warning("Database error, falling back to mock data: %s", exc)
        response.headers[DATA_SOURCE_HEADER] = "mock"
        return mock()
