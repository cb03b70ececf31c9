import unittest
from skyfighter.state import Cause, GameResult, GameState


class TestGameState(unittest.TestCase):
    def setUp(self):
        self.state = GameState()

    def test_initial(self):
        self.assertEqual((self.state.score, self.state.lives, self.state.wave), (0, 100, 1))
        self.assertFalse(self.state.terminal)
        self.assertIsNone(self.state.result)

    def test_damage_and_heal_clamped(self):
        self.state.damage(30)
        self.assertEqual(self.state.lives, 70)
        self.state.heal(50)
        self.assertEqual(self.state.lives, 100)

    def test_destroyed_when_lives_run_out(self):
        self.state.add_score(250)
        self.state.damage(150)

        self.assertEqual(self.state.lives, 0)
        self.assertEqual(self.state.cause, Cause.DESTROYED)
        self.assertEqual(self.state.result, GameResult(score=250, wave=1, cause=Cause.DESTROYED))

    def test_crash(self):
        self.state.crash()
        self.assertEqual(self.state.lives, 0)
        self.assertEqual(self.state.cause, Cause.CRASHED)

    def test_frozen_after_game_over(self):
        self.state.add_score(100)
        self.state.crash()

        self.state.add_score(500)
        self.state.advance_wave()
        self.state.heal(25)
        self.state.damage(10)
        self.state.add_pending(3)

        self.assertEqual(self.state.score, 100)
        self.assertEqual(self.state.wave, 1)
        self.assertEqual(self.state.lives, 0)
        self.assertEqual(self.state.pending, 0)

    def test_end_is_idempotent(self):
        first = self.state.end(Cause.CRASHED)
        self.assertIsNone(self.state.end(Cause.DESTROYED))
        self.assertEqual(self.state.cause, Cause.CRASHED)
        self.assertIs(self.state.result, first)

    def test_pending_never_negative(self):
        self.state.add_pending(2)
        self.state.resolve_pending(5)
        self.assertEqual(self.state.pending, 0)


if __name__ == '__main__':
    unittest.main()
