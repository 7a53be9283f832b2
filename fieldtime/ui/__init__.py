"""
UI package for the FieldTime game-state engine.

This package contains the Flask JSON API used by display clients.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
