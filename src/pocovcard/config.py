from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .serializer import PRODID

logger = logging.getLogger(__name__)

CONF_NAME = "pocovcard.toml"

DEFAULT_CONF = f"""# pocovcard local config (TOML)
prodid = "{PRODID}"
source_dir = "contacts"
output_dir = "cards"
"""


@dataclass
class Settings:
    prodid: str = PRODID
    source_dir: Path = Path("contacts")
    output_dir: Path = Path("cards")


def load_settings(conf_file: Path | None = None) -> Settings:
    """Read settings from a TOML file, falling back to defaults.

    Without an explicit path, ``pocovcard.toml`` in the working directory is
    used when present. Relative directories resolve against the file.
    """
    settings = Settings()
    conf = Path(conf_file) if conf_file else Path(os.getcwd()) / CONF_NAME
    if not conf.is_file():
        return settings

    try:
        data = tomllib.loads(conf.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        logger.warning("%s is malformed, using defaults: %s", conf, exc)
        return settings

    base = conf.parent
    settings.prodid = str(data.get("prodid", settings.prodid))
    settings.source_dir = base / str(data.get("source_dir", settings.source_dir))
    settings.output_dir = base / str(data.get("output_dir", settings.output_dir))
    return settings


def write_default_config(conf_file: Path) -> bool:
    """Create a config file with defaults unless one exists. Returns True if written."""
    conf_file = Path(conf_file)
    if conf_file.exists():
        return False
    conf_file.parent.mkdir(parents=True, exist_ok=True)
    conf_file.write_text(DEFAULT_CONF, encoding="utf-8")
    return True
