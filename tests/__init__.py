"""
Test Suite
==========

Test Categories:
- unit: Unit tests for individual components, Playwright mocked
- integration: End-to-end renders against a real headless Chromium
"""
