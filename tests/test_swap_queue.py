"""
Unit tests for the swap queue.

Covers enqueue validation, per-player replacement, the two-pass apply and
invalidation of stale entries.
"""
import unittest

from fieldtime.models import CommandStatus, Position, Roster
from fieldtime.services import SwapQueue


class SwapQueueTests(unittest.TestCase):
    def setUp(self) -> None:
        self.roster = Roster()
        self.active = {Position.GOALKEEPER, Position.STRIKER, Position.MIDFIELDER}
        self.queue = SwapQueue(self.active)
        self.a = self.roster.add_player("Avery")
        self.b = self.roster.add_player("Blake")
        self.c = self.roster.add_player("Cam")

    def player(self, player_id):
        return self.roster.get(player_id)

    def test_enqueue_captures_origin(self) -> None:
        self.player(self.b).move_to(Position.STRIKER)

        status = self.queue.enqueue(self.player(self.b), Position.BENCH)

        self.assertIs(status, CommandStatus.QUEUED)
        entry = self.queue.entry_for(self.b)
        self.assertIs(entry.origin, Position.STRIKER)
        self.assertIs(entry.target, Position.BENCH)
        # nothing moves until the queue is applied
        self.assertIs(self.player(self.b).current_position, Position.STRIKER)

    def test_enqueue_rejections(self) -> None:
        self.player(self.a).move_to(Position.STRIKER)

        self.assertIs(self.queue.enqueue(self.player(self.a), Position.LEFT_WING),
                      CommandStatus.POSITION_NOT_ACTIVE)
        self.assertIs(self.queue.enqueue(self.player(self.a), Position.STRIKER),
                      CommandStatus.UNCHANGED)
        self.assertIs(self.queue.enqueue(self.player(self.b), Position.BENCH),
                      CommandStatus.UNCHANGED)
        self.assertEqual(len(self.queue), 0)

    def test_requeue_replaces_previous_entry_in_place(self) -> None:
        self.queue.enqueue(self.player(self.a), Position.STRIKER)
        self.queue.enqueue(self.player(self.b), Position.MIDFIELDER)
        self.queue.enqueue(self.player(self.a), Position.GOALKEEPER)

        self.assertEqual(len(self.queue), 2)
        self.assertEqual([e.player_id for e in self.queue], [self.a, self.b])
        self.assertIs(self.queue.entry_for(self.a).target, Position.GOALKEEPER)

    def test_apply_bench_and_field_exchange(self) -> None:
        self.player(self.b).move_to(Position.STRIKER)
        self.queue.enqueue(self.player(self.a), Position.STRIKER)
        self.queue.enqueue(self.player(self.b), Position.BENCH)

        placed = self.queue.apply_all(self.roster)

        self.assertEqual(placed, 2)
        self.assertIs(self.player(self.a).current_position, Position.STRIKER)
        self.assertTrue(self.player(self.a).is_active)
        self.assertIs(self.player(self.b).current_position, Position.BENCH)
        self.assertFalse(self.player(self.b).is_active)
        self.assertEqual(len(self.queue), 0)

    def test_apply_true_swap_between_positions(self) -> None:
        self.player(self.a).move_to(Position.GOALKEEPER)
        self.player(self.b).move_to(Position.STRIKER)
        self.queue.enqueue(self.player(self.a), Position.STRIKER)
        self.queue.enqueue(self.player(self.b), Position.GOALKEEPER)

        self.queue.apply_all(self.roster)

        self.assertIs(self.player(self.a).current_position, Position.STRIKER)
        self.assertIs(self.player(self.b).current_position, Position.GOALKEEPER)
        self.assertTrue(self.player(self.a).is_active)
        self.assertTrue(self.player(self.b).is_active)

    def test_apply_benches_unqueued_occupant(self) -> None:
        self.player(self.c).move_to(Position.MIDFIELDER)
        self.queue.enqueue(self.player(self.a), Position.MIDFIELDER)

        self.queue.apply_all(self.roster)

        self.assertIs(self.player(self.a).current_position, Position.MIDFIELDER)
        self.assertIs(self.player(self.c).current_position, Position.BENCH)
        self.assertFalse(self.player(self.c).is_active)

    def test_apply_skips_removed_players_and_stale_targets(self) -> None:
        self.queue.enqueue(self.player(self.a), Position.STRIKER)
        self.queue.enqueue(self.player(self.b), Position.MIDFIELDER)
        self.player(self.c).move_to(Position.MIDFIELDER)
        self.roster.remove_player(self.a)
        self.active.discard(Position.MIDFIELDER)

        placed = self.queue.apply_all(self.roster)

        self.assertEqual(placed, 0)
        self.assertIs(self.player(self.b).current_position, Position.BENCH)
        # the invalid target was not vacated
        self.assertIs(self.player(self.c).current_position, Position.MIDFIELDER)
        self.assertEqual(len(self.queue), 0)

    def test_clear_and_discard(self) -> None:
        self.queue.enqueue(self.player(self.a), Position.STRIKER)
        self.queue.enqueue(self.player(self.b), Position.STRIKER)
        self.queue.enqueue(self.player(self.c), Position.GOALKEEPER)

        self.assertEqual(self.queue.discard_target(Position.STRIKER), 2)
        self.assertEqual([e.player_id for e in self.queue], [self.c])
        self.assertTrue(self.queue.discard_player(self.c))
        self.assertFalse(self.queue.discard_player(self.c))
        self.assertFalse(self.queue)

        self.queue.enqueue(self.player(self.a), Position.STRIKER)
        self.queue.clear()
        self.assertEqual(self.queue.entries, [])


if __name__ == "__main__":
    unittest.main()
