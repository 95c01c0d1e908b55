"""
Pydantic Models and Schemas
===========================

Core data models for the rendering pipeline: the immutable render
configuration, the resolved render source, and the session states.
"""

from typing import Optional, Dict, Any, Union, Literal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# Enums
class WaitUntil(str, Enum):
    """Navigation completion conditions."""
    LOAD = "load"
    DOMCONTENTLOADED = "domcontentloaded"
    NETWORKIDLE0 = "networkidle0"
    NETWORKIDLE2 = "networkidle2"


class SessionState(str, Enum):
    """Render session lifecycle states."""
    LAUNCHED = "launched"
    NAVIGATED = "navigated"
    MEDIA_EMULATED = "media_emulated"
    DELAYED = "delayed"
    RENDERED = "rendered"
    CLOSED = "closed"
    FAILED = "failed"


# Render configuration
class PageMargin(BaseModel):
    """Page margins, each side independent and accepting CSS units."""
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class RenderConfig(BaseModel):
    """Structured, validated rendering options."""
    scale: float = Field(1.0, gt=0, description="Scale of the webpage rendering")
    display_header_footer: bool = Field(False, description="Display header and footer")
    header_template: Optional[str] = Field(None, description="Header HTML, already resolved")
    footer_template: Optional[str] = Field(None, description="Footer HTML, already resolved")
    print_background: bool = Field(False, description="Print background graphics")
    landscape: bool = Field(False, description="Paper orientation")
    page_ranges: str = Field("", description="Pages to print, empty means all pages")

    # Paper size
    format: str = Field("Letter", description="Paper format")
    width: Optional[str] = Field(None, description="Paper width with units")
    height: Optional[str] = Field(None, description="Paper height with units")
    margin: Optional[PageMargin] = Field(None, description="Page margins")

    # Pipeline control
    wait_until: WaitUntil = Field(WaitUntil.NETWORKIDLE2, description="Navigation wait condition")
    delay_ms: int = Field(0, ge=0, description="Extra milliseconds to wait before rendering")
    emulate_media_type: str = Field("print", description="CSS media type to emulate")
    output_path: Optional[str] = Field(None, description="Where to save the PDF")
    debug: bool = Field(False, description="Echo options and surface engine I/O")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def has_explicit_size(self) -> bool:
        return self.width is not None and self.height is not None

    def pdf_options(self) -> Dict[str, Any]:
        """
        Keyword arguments for Playwright's ``page.pdf``.

        Unset options are left out. When both width and height are given,
        ``format`` is dropped so the explicit dimensions are the ones used.
        """
        options: Dict[str, Any] = {
            "scale": self.scale,
            "display_header_footer": self.display_header_footer,
            "header_template": self.header_template,
            "footer_template": self.footer_template,
            "print_background": self.print_background,
            "landscape": self.landscape,
            "page_ranges": self.page_ranges,
            "format": None if self.has_explicit_size else self.format,
            "width": self.width,
            "height": self.height,
        }
        if self.margin is not None and not self.margin.is_empty():
            options["margin"] = self.margin.model_dump(exclude_none=True)

        return {key: value for key, value in options.items() if value is not None}


# Render sources
class UrlSource(BaseModel):
    """A remote page addressed by an absolute URL."""
    kind: Literal["url"] = "url"
    url: str = Field(..., min_length=1, description="Absolute URL")

    model_config = ConfigDict(frozen=True)

    @property
    def navigation_url(self) -> str:
        return self.url


class LocalFileSource(BaseModel):
    """A page read from the local filesystem."""
    kind: Literal["file"] = "file"
    path: str = Field(..., min_length=1, description="Absolute filesystem path")
    uri: str = Field(..., description="file:// URI for the path")

    model_config = ConfigDict(frozen=True)

    @property
    def navigation_url(self) -> str:
        return self.uri


RenderSource = Union[UrlSource, LocalFileSource]
