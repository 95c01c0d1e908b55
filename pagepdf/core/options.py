"""
Render Options
==============

Normalizes the flat option mapping produced by the command line into an
immutable RenderConfig. The recognized option names are declared statically
below; anything else in the mapping is ignored.
"""

from pathlib import Path
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from pagepdf.config.logging import get_logger
from pagepdf.core.errors import ConfigurationError, TemplateReadError
from pagepdf.models.schemas import RenderConfig

logger = get_logger(__name__)

FILE_PREFIX = "file://"

# Option name -> RenderConfig field
OPTION_FIELDS: Dict[str, str] = {
    "path": "output_path",
    "scale": "scale",
    "displayHeaderFooter": "display_header_footer",
    "headerTemplate": "header_template",
    "footerTemplate": "footer_template",
    "printBackground": "print_background",
    "landscape": "landscape",
    "pageRanges": "page_ranges",
    "format": "format",
    "width": "width",
    "heigh": "height",
    "debug": "debug",
    "waitUntil": "wait_until",
    "delay": "delay_ms",
    "emulateMediaType": "emulate_media_type",
}

# Option name -> PageMargin side
MARGIN_OPTIONS: Dict[str, str] = {
    "marginTop": "top",
    "marginRight": "right",
    "marginBottom": "bottom",
    "marginLeft": "left",
}

TEMPLATE_FIELDS = ("header_template", "footer_template")


def resolve_template(value: str) -> str:
    """
    Return template HTML, reading it from disk for ``file://`` values.

    Args:
        value: Inline HTML or a ``file://`` reference

    Returns:
        The HTML text

    Raises:
        TemplateReadError: If the referenced file cannot be read
    """
    if not value.startswith(FILE_PREFIX):
        return value

    template_path = Path(value[len(FILE_PREFIX):])
    try:
        content = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateReadError(f"Cannot read template {template_path}: {e}") from e

    logger.debug("Loaded template file", path=str(template_path), length=len(content))
    return content


def build_render_config(raw_options: Mapping[str, Any]) -> RenderConfig:
    """
    Build a RenderConfig from recognized command line options.

    Args:
        raw_options: Option name to value; missing or None values count as not supplied

    Returns:
        Validated, immutable RenderConfig

    Raises:
        TemplateReadError: If a file:// template cannot be read
        ConfigurationError: If an option value is invalid
    """
    values: Dict[str, Any] = {}

    for option, field in OPTION_FIELDS.items():
        value = raw_options.get(option)
        if value is not None:
            values[field] = value

    margin = {
        side: raw_options[option]
        for option, side in MARGIN_OPTIONS.items()
        if raw_options.get(option) is not None
    }
    if margin:
        values["margin"] = margin

    for field in TEMPLATE_FIELDS:
        if isinstance(values.get(field), str):
            values[field] = resolve_template(values[field])

    try:
        return RenderConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid render options: {e}") from e
