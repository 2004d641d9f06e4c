import pytest
from sqlalchemy.exc import OperationalError

from music_library.core.errors import StorageError, storage_errors


@pytest.mark.parametrize(
    "error",
    [
        OverflowError("Python int too large to convert to SQLite INTEGER"),
        OperationalError("SELECT 1", {}, Exception("disk I/O error")),
        StorageError("duration must be an integer >= 1"),
    ],
)
def test_storage_errors_hide_detail(error):
    with pytest.raises(StorageError) as exc:
        with storage_errors("Error creating track"):
            raise error
    assert exc.value.message == "Error creating track"
    assert exc.value.__cause__ is error


def test_storage_errors_pass_other_exceptions():
    with pytest.raises(KeyError):
        with storage_errors("Error creating track"):
            raise KeyError("x")
