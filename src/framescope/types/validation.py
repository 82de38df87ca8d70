"""Validation of frame documents.

Two layers are applied to every JSON map and every frame a device sends:

1. Shape: mashumaro must be able to build a `Frame` from the document.
2. Content: `validate_frame` checks types (mashumaro passes scalars through
   unchecked) and the frame rules: a non-empty title and at least one group.
   Group ids are positional (`Frame.assign_ids`) so they are not validated.

`parse_frame` combines both and raises `ValidationError`. The validate_* helpers
follow the usual `(is_valid, error_message)` convention.
"""

from __future__ import annotations

from typing import Any

from mashumaro.exceptions import InvalidFieldValue, MissingField

from .frame import Dataset, Frame, Group


class ValidationError(Exception):
    """Raised when a document can't be turned into a valid Frame."""

    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_dataset(dataset: Dataset) -> tuple[bool, str]:
    """Validate the field types of a single dataset.

    Parameters
    ----------
    dataset : Dataset
        Dataset to validate

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    if not _is_int(dataset.index):
        return False, f"Dataset index must be an integer, got {dataset.index!r}"
    for name in ("title", "value", "units", "widget"):
        if not isinstance(getattr(dataset, name), str):
            return False, f"Dataset {name} must be a string"
    for name in ("graph", "display_in_overview"):
        if not isinstance(getattr(dataset, name), bool):
            return False, f"Dataset {name} must be a boolean"
    return True, ""


def validate_group(group: Group) -> tuple[bool, str]:
    """Validate a group and each of its datasets."""
    if not isinstance(group.title, str) or not isinstance(group.widget, str):
        return False, "Group title and widget must be strings"
    if not isinstance(group.datasets, list):
        return False, f"Group '{group.title}' datasets must be a list"
    for dataset in group.datasets:
        is_valid, msg = validate_dataset(dataset)
        if not is_valid:
            return False, f"Group '{group.title}': {msg}"
    return True, ""


def validate_frame(frame: Frame) -> tuple[bool, str]:
    """Validate a frame built from a document.

    Parameters
    ----------
    frame : Frame
        Frame to validate

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    if not isinstance(frame.title, str) or not frame.title:
        return False, "Frame title is missing"
    if not isinstance(frame.groups, list) or not frame.groups:
        return False, "Frame has no groups"
    if not isinstance(frame.frame_start, str) or not isinstance(frame.frame_end, str):
        return False, "frameStart and frameEnd must be strings"

    for group in frame.groups:
        is_valid, msg = validate_group(group)
        if not is_valid:
            return False, msg
    return True, ""


def parse_frame(document: Any) -> Frame:
    """Build and validate a Frame from a decoded JSON document.

    Group ids are assigned by position, any ids present in the document are
    ignored.

    Raises
    ------
    ValidationError
        If the document isn't an object, doesn't have the frame shape, or fails
        `validate_frame`.
    """
    if not isinstance(document, dict):
        raise ValidationError(
            f"Expected a JSON object, got {type(document).__name__}"
        )
    try:
        frame = Frame.from_dict(document)
    except (
        MissingField,
        InvalidFieldValue,
        TypeError,
        ValueError,
        AttributeError,
        KeyError,
    ) as e:
        raise ValidationError(f"Document does not describe a frame: {e}") from e

    frame.assign_ids()
    is_valid, msg = validate_frame(frame)
    if not is_valid:
        raise ValidationError(msg)
    return frame
