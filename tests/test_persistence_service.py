import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from fieldtime.models import GameState, Player, Position
from fieldtime.services import PersistenceError, PersistenceService
from fieldtime.utils.constants import GAME_DURATION_KEY, PLAYERS_KEY


class PersistenceServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "nested", "state.json")
        striker = Player(first_name="Noa")
        striker.move_to(Position.STRIKER)
        self.state = GameState(players=[striker, Player(first_name="Eli")],
                               duration_seconds=1200, remaining_seconds=900)

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_save_and_load(self) -> None:
        PersistenceService.save_game_to_file(self.state, self.path)
        self.assertTrue(os.path.exists(self.path))
        self.assertFalse(os.path.exists(self.path + ".tmp"))

        loaded = PersistenceService.load_game_from_file(self.path)

        self.assertEqual(loaded.players, self.state.players)
        self.assertEqual(loaded.remaining_seconds, 900)
        self.assertEqual(loaded.duration_seconds, 1200)

    def test_file_holds_key_value_blobs(self) -> None:
        PersistenceService.save_game_to_file(self.state, self.path)
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.assertIsInstance(data[PLAYERS_KEY], str)
        self.assertEqual(json.loads(data[GAME_DURATION_KEY]), 1200)

    def test_missing_file_gives_default_state(self) -> None:
        loaded = PersistenceService.load_game_from_file(os.path.join(self.temp_dir, "none.json"))
        self.assertEqual(loaded.players, [])
        self.assertEqual(loaded.duration_seconds, GameState().duration_seconds)

    def test_corrupt_file_gives_default_state(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        for content in ("{broken", "[1, 2, 3]"):
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(content)
            loaded = PersistenceService.load_game_from_file(self.path)
            self.assertEqual(loaded.players, [])

    def test_partially_corrupt_file_keeps_good_keys(self) -> None:
        PersistenceService.save_game_to_file(self.state, self.path)
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data[PLAYERS_KEY] = "{oops"
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

        loaded = PersistenceService.load_game_from_file(self.path)

        self.assertEqual(loaded.players, [])
        self.assertEqual(loaded.duration_seconds, 1200)

    def test_out_of_range_counter_skips_only_that_player(self) -> None:
        PersistenceService.save_game_to_file(self.state, self.path)
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        good = json.loads(data[PLAYERS_KEY])
        data[PLAYERS_KEY] = (
            '[{"id": "bad", "first_name": "Bad", "seconds_played": 1e999}, '
            + json.dumps(good[0]) + "]"
        )
        data[GAME_DURATION_KEY] = "1e999"
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

        loaded = PersistenceService.load_game_from_file(self.path)

        self.assertEqual([p.first_name for p in loaded.players], ["Noa"])
        self.assertEqual(loaded.duration_seconds, GameState().duration_seconds)
        self.assertEqual(loaded.remaining_seconds, 900)

    def test_unexpected_restore_error_gives_default_state(self) -> None:
        PersistenceService.save_game_to_file(self.state, self.path)
        with patch.object(GameState, "from_snapshot", side_effect=RuntimeError("boom")):
            loaded = PersistenceService.load_game_from_file(self.path)
        self.assertEqual(loaded.players, [])
        self.assertEqual(loaded.duration_seconds, GameState().duration_seconds)

    def test_save_failure_raises_persistence_error(self) -> None:
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, "w", encoding="utf-8") as f:
            f.write("not a directory")
        with self.assertRaises(PersistenceError):
            PersistenceService.save_game_to_file(self.state, os.path.join(blocker, "state.json"))

    def test_auto_save(self) -> None:
        path = PersistenceService.auto_save(self.state, os.path.join(self.temp_dir, "autosave"))
        self.assertIsNotNone(path)
        self.assertTrue(os.path.basename(path).startswith("game_autosave_"))
        self.assertEqual(PersistenceService.load_game_from_file(path).players, self.state.players)

    def test_auto_save_failure_returns_none(self) -> None:
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, "w", encoding="utf-8") as f:
            f.write("x")
        self.assertIsNone(PersistenceService.auto_save(self.state, blocker))


if __name__ == "__main__":
    unittest.main()
