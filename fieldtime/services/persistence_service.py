"""
Persistence service for the FieldTime game-state engine.

This module handles saving and loading game state snapshots to/from JSON
files. A snapshot file is a flat JSON object of versioned key -> blob.
"""
import datetime
import json
import logging
import os
from typing import Optional

from ..models import GameState
from ..utils.constants import AUTOSAVE_DIR

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when a game state cannot be written."""
    pass


class PersistenceService:
    """
    Service for persisting game state to JSON files.

    Loading never blocks startup: a missing, unreadable or corrupt file
    yields a default GameState, and partially damaged files keep whatever
    keys are still readable.
    """

    @staticmethod
    def save_game_to_file(game_state: GameState, file_path: str) -> None:
        """
        Save game state to a JSON file.

        Args:
            game_state: The game state to save
            file_path: Path where to save the file

        Raises:
            PersistenceError: If the file cannot be written
        """
        snapshot = game_state.to_snapshot()

        directory = os.path.dirname(file_path)
        tmp_path = f"{file_path}.tmp"
        try:
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2)
            os.replace(tmp_path, file_path)
        except OSError as exc:
            raise PersistenceError(f"Could not save game to {file_path}: {exc}") from exc

    @staticmethod
    def load_game_from_file(file_path: str) -> GameState:
        """
        Load game state from a JSON file.

        Args:
            file_path: Path to the JSON file to load

        Returns:
            GameState instance loaded from file, or a default state when the
            file is missing or unreadable
        """
        if not os.path.exists(file_path):
            logger.info("No saved game at %s, starting fresh", file_path)
            return GameState()

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read saved game %s: %s", file_path, exc)
            return GameState()

        if not isinstance(data, dict):
            logger.warning("Saved game %s is not a snapshot object", file_path)
            return GameState()
        try:
            return GameState.from_snapshot(data)
        except Exception:
            # A saved game must never keep the app from starting
            logger.exception("Could not restore saved game %s", file_path)
            return GameState()

    @staticmethod
    def auto_save(game_state: GameState, auto_save_dir: str = AUTOSAVE_DIR) -> Optional[str]:
        """
        Automatically save game state with timestamp.

        Args:
            game_state: Game state to save
            auto_save_dir: Directory for auto-save files

        Returns:
            Path to saved file, or None if save failed
        """
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        file_path = os.path.join(auto_save_dir, f"game_autosave_{timestamp}.json")
        try:
            PersistenceService.save_game_to_file(game_state, file_path)
        except PersistenceError as exc:
            # Auto-save should not crash the application
            logger.warning("Auto-save failed: %s", exc)
            return None
        return file_path

