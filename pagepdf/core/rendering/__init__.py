"""
Rendering Module
===============

PDF creation with browser automation.

Components:
- session: Playwright session running the navigate / emulate / delay / render pipeline
- network: in-flight request tracking for the networkidle2 wait condition
"""
