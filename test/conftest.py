import asyncio

import pytest
import simplejson as json

from framescope.util import Settings

SCENARIO_A = {
    "title": "T",
    "groups": [
        {"title": "G", "widget": "", "datasets": [{"index": 1, "title": "X"}]}
    ],
    "frameStart": "/*",
    "frameEnd": "*/",
}

WEATHER = {
    "title": "Weather station",
    "frameStart": "$",
    "frameEnd": ";",
    "groups": [
        {
            "title": "Climate",
            "widget": "",
            "datasets": [
                {"index": 1, "title": "Temperature", "units": "C", "graph": True},
                {"index": 2, "title": "Humidity", "units": "%"},
            ],
        },
        {
            "title": "Wind",
            "widget": "compass",
            "datasets": [
                {"index": 3, "title": "Direction"},
                {"index": 5, "title": "Gust"},
                {"index": 0, "title": "Unused"},
            ],
        },
    ],
}


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: marks test as slow running test")


class RecordingTransport:
    """Transport stand-in that records every delimiter push."""

    def __init__(self):
        self.calls = []
        self.start = None
        self.finish = None

    def set_start_sequence(self, sequence: bytes) -> None:
        self.calls.append(("start", sequence))
        self.start = sequence

    def set_finish_sequence(self, sequence: bytes) -> None:
        self.calls.append(("finish", sequence))
        self.finish = sequence


class RecordingMessageSink:
    def __init__(self):
        self.messages = []

    def show_message(self, title: str, text: str = "", critical: bool = False) -> None:
        self.messages.append((title, text, critical))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create temporary config directory"""
    return tmp_path / ".framescope"


@pytest.fixture
def settings(temp_config_dir, monkeypatch):
    """Settings instance writing into a temporary config directory"""
    monkeypatch.setattr(Settings, "config_dir", temp_config_dir)
    return Settings()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def message_sink():
    return RecordingMessageSink()


@pytest.fixture
def notif_queue():
    return asyncio.Queue()


@pytest.fixture
def drain():
    """Returns a function emptying a notification queue into a list."""

    def _drain(queue: asyncio.Queue) -> list:
        items = []
        while not queue.empty():
            items.append(queue.get_nowait())
        return items

    return _drain


@pytest.fixture
def write_json(tmp_path):
    """Returns a function writing a document (dict or raw str) to a file."""

    def _write(document, name="project.json"):
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def scenario_a_file(write_json):
    return write_json(SCENARIO_A, "scenario_a.json")


@pytest.fixture
def weather_file(write_json):
    return write_json(WEATHER, "weather.json")
