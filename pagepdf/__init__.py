"""
pagepdf
=======

Render a web page (remote URL or local HTML file) to a PDF document with
headless Chromium driven through Playwright.

This package provides:
- Option normalization into an immutable render configuration
- Source resolution for URLs and local files
- A scoped rendering session: launch, navigate, emulate, delay, render, close
- A command line interface with a single error boundary
"""

__version__ = "1.3.0"
