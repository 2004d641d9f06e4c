from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from music_library.core.errors import StorageError
from music_library.db.base import Base

TEXT_COLUMNS = ("songTitle", "artistName", "albumName", "genre")

# SQLite INTEGER 는 부호 있는 64비트
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def current_year() -> int:
    return datetime.now().year


class Track(Base):
    __tablename__ = "tracks"
    __table_args__ = (
        *(
            CheckConstraint(f'length(trim("{name}")) > 0', name=f"ck_tracks_{name}_not_empty")
            for name in TEXT_COLUMNS
        ),
        CheckConstraint('"duration" >= 1', name="ck_tracks_duration_min"),
        # 삭제 후에도 trackId 재사용 금지
        {"sqlite_autoincrement": True},
    )

    track_id = Column("trackId", Integer, primary_key=True, autoincrement=True)
    song_title = Column("songTitle", String(255), nullable=False)
    artist_name = Column("artistName", String(255), nullable=False)
    album_name = Column("albumName", String(255), nullable=False)
    genre = Column("genre", String(255), nullable=False)
    duration = Column("duration", Integer, nullable=False)
    release_year = Column("releaseYear", Integer, nullable=False)
    created_at = Column("createdAt", DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(
        "updatedAt", DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    @validates("song_title", "artist_name", "album_name", "genre")
    def _validate_text(self, key, value):
        if not isinstance(value, str) or not value.strip():
            raise StorageError(f"{key} must not be empty")
        return value

    @validates("duration")
    def _validate_duration(self, key, value):
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= INT64_MAX:
            raise StorageError("duration must be an integer >= 1")
        return value

    @validates("release_year")
    def _validate_release_year(self, key, value):
        if isinstance(value, bool) or not isinstance(value, int) or not INT64_MIN <= value <= current_year():
            raise StorageError(f"release_year must be an integer <= {current_year()}")
        return value
