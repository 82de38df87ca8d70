"""Tests for JSON map loading.

Covers the load outcomes (success, unreadable, malformed, invalid), the state left
behind by each, delimiter pushes and the one-notification-per-attempt rule.
"""

import os

import pytest

from framescope.builder import SchemaLoader
from framescope.types import (
    FileIOError,
    JsonParseError,
    OperationMode,
    SchemaChanged,
    SchemaError,
    SchemaValidationError,
)
from framescope.util import JSON_MAP_LOCATION_KEY


@pytest.fixture
def mode():
    """Mutable holder for the operation mode the loader sees."""
    return {"mode": OperationMode.PROJECT_FILE}


@pytest.fixture
def loader(transport, settings, notif_queue, message_sink, mode):
    return SchemaLoader(
        transport, settings, notif_queue, message_sink, lambda: mode["mode"]
    )


def test_scenario_a_load_pushes_delimiters(loader, transport, scenario_a_file):
    loader.load(scenario_a_file)
    assert loader.template is not None
    assert transport.start == b"/*"
    assert transport.finish == b"*/"
    # finish is pushed before start
    assert transport.calls == [("finish", b"*/"), ("start", b"/*")]


@pytest.mark.parametrize(
    "other_mode", [OperationMode.QUICK_PLOT, OperationMode.DEVICE_SENDS_JSON]
)
def test_load_outside_project_mode_leaves_transport(
    loader, transport, scenario_a_file, mode, other_mode
):
    mode["mode"] = other_mode
    loader.load(scenario_a_file)
    assert loader.template is not None
    assert transport.calls == []


def test_successful_load_state(loader, settings, scenario_a_file):
    loader.load(scenario_a_file)
    assert loader.json_map_filepath == os.path.abspath(scenario_a_file)
    assert loader.json_map_filename == os.path.basename(loader.json_map_filepath)
    assert loader.json_map_filename == "scenario_a.json"
    assert settings.value(JSON_MAP_LOCATION_KEY) == loader.json_map_filepath

    frame = loader.frame
    assert frame.title == "T"
    assert frame.groups[0].datasets[0].title == "X"


def test_empty_path_is_noop(loader, notif_queue, settings, scenario_a_file, drain):
    loader.load(scenario_a_file)
    drain(notif_queue)
    template = loader.template
    loader.load("")
    assert loader.template is template
    assert loader.json_map_filepath != ""
    assert notif_queue.empty()


@pytest.mark.parametrize(
    "content, error",
    [
        ("{not json", JsonParseError),
        ('{"title": "T", "groups": [', JsonParseError),
        ("[1, 2, 3]", SchemaValidationError),
        ('{"title": "T", "groups": []}', SchemaValidationError),
        ('{"groups": [{"title": "G", "datasets": []}]}', SchemaValidationError),
    ],
)
def test_bad_document_clears_previous_template(
    loader, settings, message_sink, write_json, scenario_a_file, content, error
):
    loader.load(scenario_a_file)
    assert loader.template is not None
    live_frame = loader.frame

    bad_file = write_json(content, "bad.json")
    with pytest.raises(error):
        loader.load(bad_file)

    assert loader.template is None
    assert loader.json_map_filepath == ""
    assert loader.json_map_filename == ""
    assert settings.value(JSON_MAP_LOCATION_KEY) == ""
    assert not loader.frame.is_valid()
    assert not live_frame.is_valid()

    title, text, critical = message_sink.messages[-1]
    assert title == error.title
    assert critical


def test_deeply_nested_document(
    loader, settings, message_sink, scenario_a_file, tmp_path
):
    loader.load(scenario_a_file)
    path = tmp_path / "deep.json"
    path.write_bytes(b"[" * 100000 + b"]" * 100000)

    with pytest.raises(JsonParseError):
        loader.load(str(path))

    assert loader.template is None
    assert loader.json_map_filepath == ""
    assert settings.value(JSON_MAP_LOCATION_KEY) == ""
    assert message_sink.messages[-1][0] == "JSON parse error"


def test_non_utf8_document(loader, tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(JsonParseError):
        loader.load(str(path))


def test_missing_file(loader, settings, message_sink, scenario_a_file, tmp_path):
    loader.load(scenario_a_file)
    with pytest.raises(FileIOError) as exc_info:
        loader.load(str(tmp_path / "does_not_exist.json"))

    assert isinstance(exc_info.value, SchemaError)
    assert loader.template is None
    assert settings.value(JSON_MAP_LOCATION_KEY) == ""
    assert message_sink.messages[-1] == (
        "Cannot read JSON file",
        "Please check file permissions & location",
        True,
    )


def test_one_notification_per_attempt(
    loader, notif_queue, drain, scenario_a_file, write_json
):
    loader.load(scenario_a_file)
    notifs = drain(notif_queue)
    assert len(notifs) == 1
    assert isinstance(notifs[0], SchemaChanged)
    assert notifs[0].loaded
    assert notifs[0].filename == "scenario_a.json"

    with pytest.raises(JsonParseError):
        loader.load(write_json("oops", "bad.json"))
    notifs = drain(notif_queue)
    assert len(notifs) == 1
    assert not notifs[0].loaded
    assert notifs[0].filepath == ""


def test_reload_is_idempotent(loader, scenario_a_file):
    loader.load(scenario_a_file)
    first = loader.template
    loader.reload()
    second = loader.template
    assert first is not second
    assert first == second
    assert loader.frame == first.build_frame()


def test_load_replaces_live_frame(loader, scenario_a_file, weather_file):
    loader.load(scenario_a_file)
    old_frame = loader.frame
    loader.load(weather_file)
    assert loader.frame is not old_frame
    assert not old_frame.is_valid()
    assert loader.frame.title == "Weather station"
    assert loader.json_map_filename == "weather.json"
