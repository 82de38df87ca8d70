# -*- coding: utf-8 -*-
"""
Utility functions and constants for framescope.

- Logging configuration and management (loguru)
- Persisted settings (INI files)
- Small concrete collaborators for the frame builder (transport, playback,
  message sink)

Examples
--------
Logging to the console only:
```python
from framescope.util import start_log
start_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")
```

See Also
--------
framescope.util.logging : Logging configuration
framescope.util.settings : Settings persistence
framescope.util.adapters : Transport/playback/message sink adapters
"""

from .adapters import LineTransport, LogMessageSink, StaticPlayback
from .defaults import (
    CONFIG_DIR,
    DEFAULT_LOGLEVEL,
    JSON_MAP_LOCATION_KEY,
    OPERATION_MODE_KEY,
    SETTINGS_SECTION,
    SINGLE_LINE_ERR_LOG,
    TEST_LOGLEVEL,
)
from .logging import (
    clear_log,
    format_error_response,
    log_default_path,
    shutdown_log,
    start_log,
)
from .settings import Settings

__all__ = [
    "CONFIG_DIR",
    "DEFAULT_LOGLEVEL",
    "JSON_MAP_LOCATION_KEY",
    "OPERATION_MODE_KEY",
    "SETTINGS_SECTION",
    "SINGLE_LINE_ERR_LOG",
    "TEST_LOGLEVEL",
    "LineTransport",
    "LogMessageSink",
    "StaticPlayback",
    "Settings",
    "clear_log",
    "format_error_response",
    "log_default_path",
    "shutdown_log",
    "start_log",
]
