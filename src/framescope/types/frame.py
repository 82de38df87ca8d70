"""Frame data model: Frame -> Group -> Dataset.

These dataclasses double as the JSON document shape. A project file ("JSON map")
and a frame streamed by a device in DEVICE_SENDS_JSON mode are both read with
`Frame.from_dict`, keys use the camelCase names of the document format (see the
field aliases).

NB: a Frame built from a project is long lived and its dataset values are
overwritten in place on every decoded chunk. Consumers that need a stable copy
should call `Frame.snapshot()`.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterator

import simplejson as json
from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

UNSET_GROUP_ID = -1


def _to_text(value: Any) -> Any:
    # devices often send numbers/bools as JSON scalars, datasets hold text
    if value is None:
        return ""
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return value


@dataclass(kw_only=True)
class Dataset(DataClassDictMixin):
    """One named value of a group.

    Attributes
    ----------
    index : int
        1-based position of this dataset in the decoded field list. Values < 1
        never match any field.
    title : str
        Display name.
    value : str
        Current value, as text.
    units : str
        Display units, may be empty.
    widget : str
        Widget hint for this dataset, may be empty.
    graph : bool
        Eligible for plotting.
    display_in_overview : bool
        Shown on the dashboard overview.
    group_id : int
        Id of the owning group, UNSET_GROUP_ID until assigned.
    """

    class Config(BaseConfig):
        serialize_by_alias = True

    index: int = 0
    title: str = ""
    value: str = ""
    units: str = ""
    widget: str = ""
    graph: bool = False
    display_in_overview: bool = field(
        default=False, metadata=field_options(alias="displayInOverview")
    )
    group_id: int = field(
        default=UNSET_GROUP_ID, metadata=field_options(alias="groupId")
    )

    def __post_init__(self):
        self.value = _to_text(self.value)


@dataclass(kw_only=True)
class Group(DataClassDictMixin):
    """A titled collection of datasets with a display widget hint."""

    class Config(BaseConfig):
        serialize_by_alias = True

    group_id: int = field(default=0, metadata=field_options(alias="groupId"))
    title: str = ""
    widget: str = ""
    datasets: list[Dataset] = field(default_factory=list)

    def dataset_count(self) -> int:
        return len(self.datasets)


@dataclass(kw_only=True)
class Frame(DataClassDictMixin):
    """One decoded snapshot of device data."""

    class Config(BaseConfig):
        serialize_by_alias = True

    title: str = ""
    groups: list[Group] = field(default_factory=list)
    frame_start: str = field(default="", metadata=field_options(alias="frameStart"))
    frame_end: str = field(default="", metadata=field_options(alias="frameEnd"))

    def clear(self) -> None:
        """Reset to the empty frame (in place)."""
        self.title = ""
        self.groups = []
        self.frame_start = ""
        self.frame_end = ""

    def is_valid(self) -> bool:
        return bool(self.title) and len(self.groups) > 0

    def group_count(self) -> int:
        return len(self.groups)

    def dataset_count(self) -> int:
        return sum(group.dataset_count() for group in self.groups)

    def iter_datasets(self) -> Iterator[Dataset]:
        for group in self.groups:
            yield from group.datasets

    def assign_ids(self) -> None:
        """Number groups by position and point each dataset at its group."""
        for group_id, group in enumerate(self.groups):
            group.group_id = group_id
            for dataset in group.datasets:
                dataset.group_id = group_id

    def snapshot(self) -> Frame:
        """Deep copy, safe to keep after the next decode."""
        return copy.deepcopy(self)
