"""Quick plot: a throwaway frame layout for comma separated values.

With no project loaded, each chunk `v1,v2,...,vN` becomes a frame with:

- group 0, "datagrid": every channel, as a table
- group 1, "multiplot": every channel on one plot (only when N > 1)
- group 2, individual plots: every channel graphed on its own, and when there is
  a single channel it is also shown on the overview
"""

from __future__ import annotations

import dataclasses

from framescope.types import Dataset, Frame, Group

FRAME_TITLE = "Quick Plot"
DATAGRID_TITLE = "Quick Plot Data"
MULTIPLOT_TITLE = "Multiple Plots"
PLOTS_TITLE = "Individual Plots"

DATAGRID_ID = 0
MULTIPLOT_ID = 1
PLOTS_ID = 2


def split_channels(data: bytes) -> list[str]:
    return [field.decode("utf-8", errors="replace") for field in data.split(b",")]


def synthesize(data: bytes) -> Frame:
    """Build the quick plot frame for one chunk.

    The caller is expected to drop empty chunks before calling this.
    """
    datasets = [
        Dataset(
            group_id=DATAGRID_ID,
            index=channel,
            title=f"Channel {channel}",
            value=value,
            graph=False,
        )
        for channel, value in enumerate(split_channels(data), start=1)
    ]

    frame = Frame(title=FRAME_TITLE)
    frame.groups.append(
        Group(
            group_id=DATAGRID_ID,
            title=DATAGRID_TITLE,
            widget="datagrid",
            datasets=datasets,
        )
    )

    if len(datasets) > 1:
        frame.groups.append(
            Group(
                group_id=MULTIPLOT_ID,
                title=MULTIPLOT_TITLE,
                widget="multiplot",
                datasets=[dataclasses.replace(d, group_id=MULTIPLOT_ID) for d in datasets],
            )
        )

    single = len(datasets) == 1
    frame.groups.append(
        Group(
            group_id=PLOTS_ID,
            title=PLOTS_TITLE,
            widget="",
            datasets=[
                dataclasses.replace(
                    d, group_id=PLOTS_ID, graph=True, display_in_overview=single
                )
                for d in datasets
            ],
        )
    )
    return frame
