import logging

from music_library.core.logging import setup_logging


def test_setup_logging_adds_one_handler():
    root = logging.getLogger()
    before = root.level
    try:
        setup_logging("debug")
        setup_logging("INFO")
        named = [h for h in root.handlers if h.get_name() == "music_library"]
        assert len(named) == 1
        assert root.level == logging.INFO
    finally:
        for h in [h for h in root.handlers if h.get_name() == "music_library"]:
            root.removeHandler(h)
        root.setLevel(before)
