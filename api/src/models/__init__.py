"""Data models for the FastAPI service.

This package contains Pydantic models for request validation and for the
theme data exchanged with the color theme provider.
"""
