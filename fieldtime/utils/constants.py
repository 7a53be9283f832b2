"""
Constants for the FieldTime game-state engine.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "FieldTime"

# Game timing defaults
DEFAULT_GAME_DURATION_SECONDS = 40 * 60
MIN_GAME_LENGTH_MIN = 1
MAX_GAME_LENGTH_MIN = 999
TICK_INTERVAL_SECONDS = 1.0

# Snapshot keys (versioned by name; bump the suffix when a format changes)
PLAYERS_KEY = "players.codable.v2"
LEGACY_NAMES_KEY = "playerNames"
GAME_DURATION_KEY = "gameDuration"
GAME_REMAINING_KEY = "gameRemaining.v1"
SWAP_QUEUE_KEY = "swapQueue.codable.v1"
ACTIVE_POSITIONS_KEY = "activePositions.v1"

# Web adapter defaults
DEFAULT_WEB_HOST = "127.0.0.1"
DEFAULT_WEB_PORT = 7122
DEFAULT_STATE_FILE = "fieldtime_state.json"
AUTOSAVE_DIR = "autosave"
