"""Local configuration for mdchapter."""

from __future__ import annotations

import os


DEFAULT_OUTPUT_FORMAT = "html"
DEFAULT_CODE_LANGUAGE = "text"
DEFAULT_ADMONITION_LABELS = "NB,Note,Warning,Tip"
MAX_HEADING_LEVEL = 6
SUPPORTED_FORMATS = ("html", "text", "markdown")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Content before the first heading is kept as preamble unless disabled.
MDCHAPTER_ALLOW_PREAMBLE = _env_flag("MDCHAPTER_ALLOW_PREAMBLE", True)
MDCHAPTER_DEFAULT_FORMAT = os.getenv("MDCHAPTER_DEFAULT_FORMAT", DEFAULT_OUTPUT_FORMAT)
MDCHAPTER_DEFAULT_CODE_LANGUAGE = os.getenv("MDCHAPTER_DEFAULT_CODE_LANGUAGE", DEFAULT_CODE_LANGUAGE)
MDCHAPTER_ADMONITION_LABELS = tuple(
    label.strip()
    for label in os.getenv("MDCHAPTER_ADMONITION_LABELS", DEFAULT_ADMONITION_LABELS).split(",")
    if label.strip()
)
