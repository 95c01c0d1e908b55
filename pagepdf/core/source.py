"""Resolution of the positional argument into something Chromium can navigate to."""

from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

from pagepdf.config.logging import get_logger
from pagepdf.core.errors import MissingSourceError
from pagepdf.models.schemas import LocalFileSource, RenderSource, UrlSource

logger = get_logger(__name__)


def is_url(location: str) -> bool:
    """True for absolute URLs that carry both a scheme and an authority."""
    parts = urlsplit(location)
    return bool(parts.scheme) and bool(parts.netloc) and parts.scheme != "file"


def _local_file(path: Path) -> LocalFileSource:
    absolute = path.expanduser().resolve()
    return LocalFileSource(path=str(absolute), uri=absolute.as_uri())


def resolve_source(location: Optional[str]) -> RenderSource:
    """
    Classify a location as a remote URL or a local file.

    Args:
        location: URL or filesystem path from the command line

    Returns:
        UrlSource for absolute URLs, LocalFileSource otherwise

    Raises:
        MissingSourceError: If no location was given
    """
    if location is None or not location.strip():
        raise MissingSourceError("No URL or file path given to render")

    # Plain paths are used as given, surrounding whitespace included
    stripped = location.strip()

    if is_url(stripped):
        source: RenderSource = UrlSource(url=stripped)
    elif stripped.startswith("file:"):
        source = _local_file(Path(url2pathname(urlsplit(stripped).path)))
    else:
        source = _local_file(Path(location))

    logger.debug("Resolved render source", kind=source.kind, target=source.navigation_url)
    return source
