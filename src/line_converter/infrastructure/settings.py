"""Settings file loading."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from line_converter.errors import ConfigLoadError
from line_converter.schemas import Settings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("settings.xml")
SETTINGS_ROOT_TAG = "Settings"


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def parse_settings_xml(content: str) -> dict[str, str]:
    """Extract ``<Settings>`` child elements as a flat mapping.

    Parameters
    ----------
    content : str
        XML document text.

    Returns
    -------
    dict[str, str]
        Element name to stripped element text.

    Raises
    ------
    xml.etree.ElementTree.ParseError
        If the document is not well-formed XML.
    ValueError
        If the root element is not ``<Settings>`` or an element is repeated.
    """
    root = ET.fromstring(content)
    if _local_name(root.tag) != SETTINGS_ROOT_TAG:
        raise ValueError(
            f"root element must be <{SETTINGS_ROOT_TAG}>, got <{_local_name(root.tag)}>"
        )
    payload: dict[str, str] = {}
    for child in root:
        name = _local_name(child.tag)
        if name in payload:
            raise ValueError(f"element <{name}> is repeated")
        payload[name] = (child.text or "").strip()
    return payload


def load_settings(path: Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load run settings from an XML file.

    A missing file is not an error: a warning is logged and defaults are
    returned.

    Parameters
    ----------
    path : Path, default=Path("settings.xml")
        Settings file location.

    Returns
    -------
    Settings
        Validated settings.

    Raises
    ------
    ConfigLoadError
        If the file exists but cannot be read, parsed or validated.
    """
    if not path.exists():
        logger.warning("Settings file %s is missing; using defaults.", path)
        return Settings()
    try:
        content = path.read_text(encoding="utf-8-sig")
        return Settings.model_validate(parse_settings_xml(content))
    except (OSError, ET.ParseError, ValueError) as exc:
        raise ConfigLoadError(f"Unable to read settings file {path}: {exc}") from exc
