# -*- coding: utf-8 -*-
"""# framescope Documentation

`Frame decoding for streamed device telemetry`

A (python) library that turns the raw byte chunks a device streams over a serial
port, socket or similar transport into structured frames: groups of named,
indexed datasets that a dashboard or logger can render.

Three operation modes are supported:

- **Project file**: a user supplied JSON map ("project") describes the groups and
  datasets, plus the start/end delimiters of a raw frame. Incoming chunks are
  decoded to text, split into fields by a pluggable frame parser, and the fields
  are written into the project's datasets by index.
- **Device sends JSON**: each chunk is itself a JSON frame.
- **Quick plot**: no project at all, each chunk is a comma separated list of
  values and a datagrid/multiplot/plots layout is synthesized on the fly.

Subpackages:

- `framescope.types`: frame model, notifications, protocols and validation.
- `framescope.decoder`: per-chunk decoding (fields, quick plot, dispatch).
- `framescope.builder`: schema loading, mode control and the owning
  `FrameBuilder` service.
- `framescope.util`: logging, settings and small adapters.
- `framescope.cli`: the `framescope` command line tool.
"""

from ._version import __version__
