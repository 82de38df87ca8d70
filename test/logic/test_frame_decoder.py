"""Tests for the per-mode frame decoder."""

import pytest
import simplejson as json

from framescope.decoder import (
    FrameDecoder,
    FunctionFrameParser,
    SeparatorFrameParser,
)
from framescope.types import DecoderMethod, Frame, OperationMode, parse_frame

PROJECT = {
    "title": "Weather station",
    "groups": [
        {
            "title": "Climate",
            "datasets": [
                {"index": 1, "title": "Temperature"},
                {"index": 2, "title": "Humidity"},
            ],
        },
        {
            "title": "Wind",
            "datasets": [
                {"index": 3, "title": "Direction"},
                {"index": 5, "title": "Gust", "value": "old"},
                {"index": 0, "title": "Zero", "value": "z"},
                {"index": -2, "title": "Negative", "value": "n"},
            ],
        },
    ],
}


@pytest.fixture
def decoder():
    return FrameDecoder()


@pytest.fixture
def project_frame():
    return parse_frame(PROJECT)


@pytest.fixture
def parser():
    return SeparatorFrameParser(",")


def values(frame):
    return {d.title: d.value for d in frame.iter_datasets()}


@pytest.mark.parametrize("mode", list(OperationMode))
def test_empty_input_is_dropped(decoder, project_frame, parser, mode):
    assert decoder.decode(b"", mode, project_frame, parser) is None


def test_unknown_mode_is_dropped(decoder, project_frame, parser):
    assert decoder.decode(b"1,2", 9, project_frame, parser) is None


# ----------------------------------------------------------------------------------
# PROJECT_FILE
# ----------------------------------------------------------------------------------


def test_project_maps_fields_by_index(decoder, project_frame, parser):
    frame = decoder.decode(
        b"21.5,40,NE,x,7,8", OperationMode.PROJECT_FILE, project_frame, parser
    )
    assert frame is project_frame
    assert values(frame) == {
        "Temperature": "21.5",
        "Humidity": "40",
        "Direction": "NE",
        "Gust": "7",
        "Zero": "z",
        "Negative": "n",
    }


def test_project_out_of_range_index_unchanged(decoder, project_frame, parser):
    # a dataset with index 5 and only 3 fields keeps its previous value
    frame = decoder.decode(b"1,2,3", OperationMode.PROJECT_FILE, project_frame, parser)
    assert values(frame)["Gust"] == "old"
    assert values(frame)["Direction"] == "3"


def test_project_values_persist_between_chunks(decoder, project_frame, parser):
    decoder.decode(b"1,2,3,4,5", OperationMode.PROJECT_FILE, project_frame, parser)
    frame = decoder.decode(b"9", OperationMode.PROJECT_FILE, project_frame, parser)
    assert values(frame)["Temperature"] == "9"
    assert values(frame)["Humidity"] == "2"
    assert values(frame)["Gust"] == "5"


def test_project_emits_even_without_updates(decoder, project_frame):
    class NoFields:
        def parse(self, text):
            return []

    frame = decoder.decode(b"xyz", OperationMode.PROJECT_FILE, project_frame, NoFields())
    assert frame is project_frame
    assert values(frame)["Gust"] == "old"


def test_project_parser_error_is_dropped(decoder, project_frame, parser):
    decoder.decode(b"1,2", OperationMode.PROJECT_FILE, project_frame, parser)

    def explode(text):
        raise ValueError("bad frame")

    assert (
        decoder.decode(
            b"3,4", OperationMode.PROJECT_FILE, project_frame, FunctionFrameParser(explode)
        )
        is None
    )
    assert values(project_frame)["Temperature"] == "1"
    assert values(project_frame)["Humidity"] == "2"


def test_project_without_parser_is_dropped(decoder, project_frame):
    assert decoder.decode(b"1,2", OperationMode.PROJECT_FILE, project_frame) is None
    assert values(project_frame)["Temperature"] == ""


def test_project_replay_bypasses_decoding(decoder, project_frame, parser):
    frame = decoder.decode(
        b"  1, 2 ",
        OperationMode.PROJECT_FILE,
        project_frame,
        parser,
        replaying=True,
        method=DecoderMethod.HEXADECIMAL,
    )
    assert values(frame)["Temperature"] == "1"
    assert values(frame)["Humidity"] == " 2"


def test_project_hex_method(decoder, project_frame):
    class PairParser:
        def parse(self, text):
            return [text[i : i + 2] for i in range(0, len(text), 2)]

    frame = decoder.decode(
        b"\x0a\xff",
        OperationMode.PROJECT_FILE,
        project_frame,
        PairParser(),
        method=DecoderMethod.HEXADECIMAL,
    )
    assert values(frame)["Temperature"] == "0a"
    assert values(frame)["Humidity"] == "ff"


def test_project_without_template_emits_empty_frame(decoder, parser):
    empty = Frame()
    assert decoder.decode(b"1,2", OperationMode.PROJECT_FILE, empty, parser) is empty


# ----------------------------------------------------------------------------------
# DEVICE_SENDS_JSON
# ----------------------------------------------------------------------------------


def test_device_json_builds_fresh_frame(decoder, project_frame):
    document = {
        "title": "Device",
        "groups": [{"title": "G", "datasets": [{"title": "v", "value": "1"}]}],
    }
    frame = decoder.decode(
        json.dumps(document).encode(), OperationMode.DEVICE_SENDS_JSON, project_frame
    )
    assert frame is not None
    assert frame is not project_frame
    assert frame.title == "Device"
    assert frame.groups[0].datasets[0].value == "1"
    # the project buffer is untouched
    assert project_frame.title == "Weather station"


@pytest.mark.parametrize(
    "data",
    [
        b"{",
        b"not json at all",
        b"[1, 2]",
        b'{"title": "", "groups": []}',
        b'{"title": "T", "groups": "x"}',
        b'\xff{"title": "T"}',
        b"[" * 100000 + b"]" * 100000,
    ],
    ids=["truncated", "text", "array", "empty", "bad-groups", "non-utf8", "deep"],
)
def test_device_json_bad_input_is_dropped(decoder, project_frame, data):
    assert decoder.decode(data, OperationMode.DEVICE_SENDS_JSON, project_frame) is None


# ----------------------------------------------------------------------------------
# QUICK_PLOT
# ----------------------------------------------------------------------------------


def test_quick_plot_ignores_project_frame(decoder, project_frame):
    frame = decoder.decode(b"1,2", OperationMode.QUICK_PLOT, project_frame)
    assert frame is not project_frame
    assert frame.title == "Quick Plot"
    assert values(project_frame)["Temperature"] == ""
