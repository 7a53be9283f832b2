#!/usr/bin/env python3
"""
Main entry point for the FieldTime web API.

This script launches the Flask-based JSON server. Set FIELDTIME_STATE_FILE
to choose where game state is saved.
"""
import logging
import os

from fieldtime.ui import run_web_app
from fieldtime.utils.constants import DEFAULT_STATE_FILE

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_web_app(state_file=os.environ.get("FIELDTIME_STATE_FILE", DEFAULT_STATE_FILE))
