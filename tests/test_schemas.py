from datetime import datetime

import pytest
from pydantic import ValidationError

from music_library.schemas.track import TrackCreate, TrackUpdate, sanitize


def _payload(**overrides):
    data = {
        "songTitle": "Hey Jude",
        "artistName": "The Beatles",
        "albumName": "Hey Jude",
        "genre": "Pop",
        "duration": 431,
        "releaseYear": 1968,
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  <b>Hi</b>  ", "Hi"),
        ("<script>alert(1)</script>Song", "alert(1)Song"),
        ("a < b", "a < b"),
        ("\tplain\n", "plain"),
        ("<br/>", ""),
    ],
)
def test_sanitize(raw, expected):
    assert sanitize(raw) == expected


def test_create_cleans_every_text_field():
    track = TrackCreate.model_validate(_payload(artistName=" <i>The</i> Beatles ", genre="Pop "))
    assert track.artist_name == "The Beatles"
    assert track.genre == "Pop"
    assert track.model_dump()["release_year"] == 1968


def test_create_reports_missing_before_invalid():
    with pytest.raises(ValidationError) as exc:
        TrackCreate.model_validate(_payload(songTitle="", duration=-1))
    errors = exc.value.errors()
    assert len(errors) == 1
    assert errors[0]["msg"] == "Missing required fields"


def test_create_zero_duration_is_invalid_not_missing():
    with pytest.raises(ValidationError) as exc:
        TrackCreate.model_validate(_payload(duration=0))
    assert exc.value.errors()[0]["msg"] == "Duration must be a positive number"


def test_create_has_no_lower_year_bound():
    assert TrackCreate.model_validate(_payload(releaseYear=-500)).release_year == -500


def test_update_keeps_only_supplied_fields():
    update = TrackUpdate.model_validate({"genre": " Jazz ", "unknown": 1, "trackId": 7})
    assert update.changes() == {"genre": "Jazz"}


def test_update_rejects_future_year():
    with pytest.raises(ValidationError) as exc:
        TrackUpdate.model_validate({"releaseYear": datetime.now().year + 1})
    assert exc.value.errors()[0]["msg"] == "Release year must be a valid year"
