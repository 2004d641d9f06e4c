from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from music_library.core.logging import logger


class TrackError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackError):
    status_code = 400


class NotFoundError(TrackError):
    status_code = 404


class StorageError(TrackError):
    status_code = 500


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    """
    저장소 예외를 StorageError(message)로 변환.
    원본 예외는 로그에만 남기고 응답에는 고정 메시지만 노출한다.
    """
    try:
        yield
    except (SQLAlchemyError, OverflowError, StorageError) as e:
        logger.exception(f"{message}: {e}")
        raise StorageError(message) from e
