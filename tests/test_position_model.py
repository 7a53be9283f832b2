import unittest

from fieldtime.models.position import (
    ADDABLE_POSITIONS, DEFAULT_ACTIVE_POSITIONS, Position
)


class PositionCatalogTests(unittest.TestCase):
    def test_short_labels(self) -> None:
        self.assertEqual(Position.GOALKEEPER.short, "GK")
        self.assertEqual(Position.LEFT_DEFENSE.short, "L DEF")
        self.assertEqual(Position.STRIKER.short, "ST")
        self.assertEqual(Position.BENCH.short, "BENCH")
        for position in Position:
            self.assertTrue(position.short)

    def test_bench_is_excluded_from_addable_and_defaults(self) -> None:
        self.assertTrue(Position.BENCH.is_bench)
        self.assertFalse(Position.STRIKER.is_bench)
        self.assertNotIn(Position.BENCH, ADDABLE_POSITIONS)
        self.assertNotIn(Position.BENCH, DEFAULT_ACTIVE_POSITIONS)
        self.assertEqual(len(ADDABLE_POSITIONS), len(set(ADDABLE_POSITIONS)))
        self.assertEqual(len(ADDABLE_POSITIONS), len(Position) - 1)
        self.assertEqual(len(DEFAULT_ACTIVE_POSITIONS), 7)

    def test_parse_accepts_value_name_and_short_label(self) -> None:
        self.assertIs(Position.parse("L Defense"), Position.LEFT_DEFENSE)
        self.assertIs(Position.parse("left_defense"), Position.LEFT_DEFENSE)
        self.assertIs(Position.parse("L DEF"), Position.LEFT_DEFENSE)
        self.assertIs(Position.parse(" Striker "), Position.STRIKER)
        self.assertIs(Position.parse("gk"), Position.GOALKEEPER)
        self.assertIs(Position.parse(Position.BENCH), Position.BENCH)

    def test_parse_unknown_returns_none(self) -> None:
        for value in ("", "   ", "Quarterback", None, 7, ["Striker"]):
            self.assertIsNone(Position.parse(value))


if __name__ == "__main__":
    unittest.main()
