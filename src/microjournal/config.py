"""Configuration management for microjournal."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

JOURNAL_HOME = Path(os.environ.get("MICROJOURNAL_HOME", Path.home() / ".microjournal"))
CONFIG_FILE = JOURNAL_HOME / "config" / "microjournal.conf"
DATA_DIR = JOURNAL_HOME / "data"

MIRROR_URL_ENV = "MICROJOURNAL_MIRROR_URL"


@dataclass
class Config:
    """microjournal configuration."""

    data_dir: str = ""
    mirror_url: str = ""
    mirror_timeout: float = 10.0
    chart_window: int = 30

    @property
    def resolved_data_dir(self) -> Path:
        """Configured data directory, or the default under JOURNAL_HOME."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from microjournal.conf, then apply env overrides."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "data_dir":
                    config.data_dir = value
                case "mirror_url":
                    config.mirror_url = value
                case "mirror_timeout":
                    try:
                        config.mirror_timeout = float(value)
                    except ValueError:
                        logger.warning(f"Invalid MIRROR_TIMEOUT: {value!r}")
                case "chart_window":
                    try:
                        config.chart_window = int(value)
                    except ValueError:
                        logger.warning(f"Invalid CHART_WINDOW: {value!r}")

    env_url = os.environ.get(MIRROR_URL_ENV)
    if env_url:
        config.mirror_url = env_url.strip()

    return config
