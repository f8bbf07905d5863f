"""HTTP API serving commission reports."""

from .main import create_app

__all__ = ["create_app"]
