"""
Data Models
===========

Pydantic data models shared by the rendering pipeline.

Models:
- schemas: render configuration, render sources and session states
"""
