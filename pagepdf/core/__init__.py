"""
Core Business Logic
==================

Core modules for turning user options and a page location into a PDF.

Modules:
- options: option normalization into a RenderConfig
- source: URL / local file resolution
- rendering: Playwright session driving the render pipeline
- output: writing the finished PDF
- errors: exception hierarchy
"""
