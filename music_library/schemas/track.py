import re
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from music_library.db.models.track import INT64_MAX, INT64_MIN, current_year

_TAG_RE = re.compile(r"<[^>]*>")

REQUIRED_FIELDS = ("songTitle", "artistName", "albumName", "genre", "duration", "releaseYear")


def sanitize(value: str) -> str:
    """HTML 태그 형태(<...>) 제거 후 앞뒤 공백 제거"""
    return _TAG_RE.sub("", value).strip()


def _as_int(value: Any) -> Optional[int]:
    """정수 값(200, 200.0)만 int로. bool / 소수 / 64비트 범위 밖은 None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def _clean_text(value: Any, info: ValidationInfo) -> str:
    cleaned = sanitize(value) if isinstance(value, str) else ""
    if not cleaned:
        name = to_camel(info.field_name or "field")
        raise PydanticCustomError("text_empty", "{name} must be a non-empty string", {"name": name})
    return cleaned


def _check_duration(value: Any) -> int:
    number = _as_int(value)
    if number is None or number <= 0:
        raise PydanticCustomError("duration_invalid", "Duration must be a positive number")
    return number


def _check_release_year(value: Any) -> int:
    number = _as_int(value)
    if number is None or number > current_year():
        raise PydanticCustomError("release_year_invalid", "Release year must be a valid year")
    return number


TrackText = Annotated[str, BeforeValidator(_clean_text)]
Duration = Annotated[int, BeforeValidator(_check_duration)]
ReleaseYear = Annotated[int, BeforeValidator(_check_release_year)]


def _require_object(data: Any) -> Any:
    if not isinstance(data, dict):
        raise PydanticCustomError("body_not_object", "Request body must be a JSON object")
    return data


class _TrackPayload(BaseModel):
    # 입력은 camelCase, 내부 속성은 snake_case. 모르는 키(trackId 포함)는 무시
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TrackCreate(_TrackPayload):
    song_title: TrackText
    artist_name: TrackText
    album_name: TrackText
    genre: TrackText
    duration: Duration
    release_year: ReleaseYear

    @model_validator(mode="before")
    @classmethod
    def require_fields(cls, data: Any) -> Any:
        _require_object(data)
        if any(data.get(name) in (None, "") for name in REQUIRED_FIELDS):
            raise PydanticCustomError("missing_fields", "Missing required fields")
        return data


class TrackUpdate(_TrackPayload):
    # 기본값은 검증되지 않으므로 명시적 null 만 검증기를 탄다
    song_title: TrackText = Field(default=None)
    artist_name: TrackText = Field(default=None)
    album_name: TrackText = Field(default=None)
    genre: TrackText = Field(default=None)
    duration: Duration = Field(default=None)
    release_year: ReleaseYear = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def require_object(cls, data: Any) -> Any:
        return _require_object(data)

    def changes(self) -> dict:
        """요청에 포함된 필드만 (부분 업데이트)"""
        return self.model_dump(exclude_unset=True)


class TrackOut(BaseModel):
    track_id: int
    song_title: str
    artist_name: str
    album_name: str
    genre: str
    duration: int
    release_year: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageOut(BaseModel):
    message: str
