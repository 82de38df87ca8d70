# -*- coding: utf-8 -*-

import pathlib

CONFIG_DIR = pathlib.Path.home() / ".framescope"
DEFAULT_LOGLEVEL = "INFO"
TEST_LOGLEVEL = "TRACE"
SINGLE_LINE_ERR_LOG = False  # reformat tracebacks into a single line

SETTINGS_SECTION = "FrameBuilder"
JSON_MAP_LOCATION_KEY = "json_map_location"
OPERATION_MODE_KEY = "operation_mode"
