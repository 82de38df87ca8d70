import configparser
from pathlib import Path
from typing import Any

from loguru import logger

from .defaults import CONFIG_DIR, SETTINGS_SECTION


class Settings:
    """Persisted key/value settings, stored in an INI file.

    One section per owner (the frame builder uses `[FrameBuilder]`). Every
    `set_value` is written through to disk immediately, unless the instance was
    created with `persist=False`, in which case values only live in memory (used
    by the CLI so it doesn't clobber a dashboard's saved state).
    """

    # Class attributes
    config_dir: Path = CONFIG_DIR
    filename: str = "settings.ini"

    def __init__(self, section: str = SETTINGS_SECTION, persist: bool = True) -> None:
        self.section = section
        self.persist = persist
        self.settings_ini = self.config_dir / self.filename
        self.config = configparser.ConfigParser(interpolation=None)

        if self.persist:
            # Create config directory if it doesn't exist
            self.config_dir.mkdir(parents=True, exist_ok=True)
            if self.settings_ini.exists():
                self.config.read(self.settings_ini)

        if not self.config.has_section(self.section):
            self.config[self.section] = {}

    def value(self, key: str, default: Any = "") -> str:
        return self.config[self.section].get(key, str(default))

    def int_value(self, key: str, default: int = 0) -> int:
        try:
            return self.config.getint(self.section, key, fallback=default)
        except ValueError:
            logger.warning("Setting {} is not an integer, using {}", key, default)
            return default

    def set_value(self, key: str, value: Any) -> None:
        self.config[self.section][key] = str(value)
        if self.persist:
            self.save()

    def save(self, filepath=None) -> None:
        if filepath is None:
            filepath = self.settings_ini
        with open(filepath, "w") as f:
            self.config.write(f)
