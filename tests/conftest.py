import pytest
from fastapi.testclient import TestClient

from music_library.core.config import Settings
from music_library.db.config import DatabaseSettings
from music_library.db.session import DatabaseManager
from music_library.main import create_app


@pytest.fixture
def db_settings(tmp_path):
    return DatabaseSettings(DB_PATH=str(tmp_path / "music_library.db"))


@pytest.fixture
def client(db_settings):
    app = create_app(Settings(), DatabaseManager(db_settings))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def track_payload():
    return {
        "songTitle": "Bohemian Rhapsody",
        "artistName": "Queen",
        "albumName": "A Night at the Opera",
        "genre": "Rock",
        "duration": 354,
        "releaseYear": 1975,
    }


@pytest.fixture
def created_track(client, track_payload):
    res = client.post("/api/tracks", json=track_payload)
    assert res.status_code == 201
    return res.json()
