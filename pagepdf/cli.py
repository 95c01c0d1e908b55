"""
Command Line Interface
======================

``pagepdf [options] <url-or-path>`` renders one page to PDF. Every failure
in the pipeline is reported here and turned into exit status 1.
"""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, NoReturn, Optional

import structlog

from pagepdf import __version__
from pagepdf.config.logging import get_logger, setup_logging
from pagepdf.core.errors import ConfigurationError, PagePdfError
from pagepdf.core.options import build_render_config
from pagepdf.core.output import write_output
from pagepdf.core.rendering.session import render_pdf
from pagepdf.core.source import resolve_source
from pagepdf.models.schemas import WaitUntil

logger = get_logger(__name__)


class OptionParser(argparse.ArgumentParser):
    """Argument parser whose usage errors go through the CLI error boundary."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(f"Invalid command line: {message}")


def build_parser() -> OptionParser:
    """Create the argument parser. ``-h`` belongs to ``--heigh``, help is ``--help`` only."""
    parser = OptionParser(
        prog="pagepdf",
        description="Render a web page or local HTML file to PDF with headless Chromium",
        add_help=False,
    )
    parser.add_argument("source", nargs="?", help="URL or path of the page to render")
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument("-V", "--version", action="version", version=__version__)

    parser.add_argument(
        "-p", "--path",
        help="The file path to save the PDF to. Without it the PDF is written to stdout, "
        "which must not be a terminal",
    )
    parser.add_argument(
        "-s", "--scale", nargs="?", type=float, const=1.0, default=1.0,
        help="Scale of the webpage rendering",
    )
    parser.add_argument(
        "-dhf", "--displayHeaderFooter", action="store_true", help="Display header and footer"
    )
    parser.add_argument(
        "-ht", "--headerTemplate", nargs="?", metavar="TEMPLATE",
        help="HTML template for the print header, or file://<path> to read it from a file",
    )
    parser.add_argument(
        "-ft", "--footerTemplate", nargs="?", metavar="TEMPLATE",
        help="HTML template for the print footer, or file://<path> to read it from a file",
    )
    parser.add_argument(
        "-pb", "--printBackground", action="store_true", help="Print background graphics"
    )
    parser.add_argument("-l", "--landscape", action="store_true", help="Paper orientation")
    parser.add_argument(
        "-pr", "--pageRanges", metavar="RANGE",
        help="Paper ranges to print, e.g. '1-5, 8, 11-13'. Defaults to all pages",
    )
    parser.add_argument(
        "-f", "--format", nargs="?", const="Letter", default="Letter",
        help="Paper format. Ignored when both width and height are given. Defaults to 'Letter'",
    )
    parser.add_argument(
        "-w", "--width", nargs="?", help="Paper width, accepts values labeled with units"
    )
    parser.add_argument(
        "-h", "--heigh", nargs="?", metavar="HEIGHT",
        help="Paper height, accepts values labeled with units",
    )
    for short, side in (("-mt", "Top"), ("-mr", "Right"), ("-mb", "Bottom"), ("-ml", "Left")):
        parser.add_argument(
            short, f"--margin{side}", nargs="?", metavar="MARGIN",
            help=f"{side} margin, accepts values labeled with units",
        )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Output PDF options and log browser I/O"
    )
    parser.add_argument(
        "-wu", "--waitUntil", nargs="?",
        choices=[choice.value for choice in WaitUntil],
        const=WaitUntil.NETWORKIDLE2.value, default=WaitUntil.NETWORKIDLE2.value,
        help="Navigation wait condition. Defaults to 'networkidle2'",
    )
    parser.add_argument(
        "-dl", "--delay", type=int, default=0, metavar="MILLISECONDS",
        help="Number of additional milliseconds to wait before rendering the PDF",
    )
    parser.add_argument(
        "-em", "--emulateMediaType", default="print", metavar="MEDIATYPE",
        help="print or screen. Defaults to print",
    )
    return parser


def collect_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Options the caller supplied (or that carry defaults), keyed by option name."""
    return {
        name: value
        for name, value in vars(args).items()
        if name != "source" and value is not None
    }


def _error_logger() -> Any:
    """CLI logger, kept on stderr when parsing or settings failed before setup_logging."""
    if not structlog.is_configured():
        structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    return logger.bind(component="cli")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    try:
        args = build_parser().parse_args(argv)
        setup_logging("DEBUG" if args.debug else None)
        config = build_render_config(collect_options(args))
        source = resolve_source(args.source)
        pdf_bytes = asyncio.run(render_pdf(source, config))
        write_output(pdf_bytes, config.output_path)
    except PagePdfError as e:
        _error_logger().error("Render failed", error=str(e), error_type=type(e).__name__)
        return 1
    except Exception as e:
        _error_logger().exception("Unexpected error while rendering", error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
