"""Domain-specific exceptions."""


class PagePdfError(Exception):
    """Base class for all pagepdf errors."""


class MissingSourceError(PagePdfError):
    """No URL or file path was given to render."""


class TemplateReadError(PagePdfError):
    """A file:// header or footer template could not be read."""


class ConfigurationError(PagePdfError):
    """Render options or PAGEPDF_* settings failed validation."""


class EngineLaunchError(PagePdfError):
    """Playwright or Chromium could not be started."""


class NavigationError(PagePdfError):
    """The page failed to load or never reached its wait condition."""


class RenderError(PagePdfError):
    """Chromium failed while producing the PDF."""


class MediaEmulationError(RenderError):
    """Chromium rejected the requested media type."""


class OutputWriteError(PagePdfError):
    """The PDF could not be written to its destination."""
