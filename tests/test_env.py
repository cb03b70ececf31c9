import unittest
import numpy as np
from config import Config
from skyfighter.entities import Archetype
from skyfighter.env import SkyFighterEnv


class TestSkyFighterEnv(unittest.TestCase):
    def setUp(self):
        self.env = SkyFighterEnv()

    def test_reset_shapes(self):
        obs, info = self.env.reset(seed=1)
        self.assertEqual(obs.shape, (Config.OBS_DIM,))
        self.assertEqual(obs.dtype, np.float32)
        self.assertTrue(self.env.observation_space.contains(obs))
        self.assertEqual(info["lives"], 100)
        self.assertGreater(len(self.env.core.world.buildings), 0)

    def test_step(self):
        self.env.reset(seed=1)
        obs, reward, term, trunc, info = self.env.step(np.zeros(Config.ACTION_DIM, dtype=np.float32))

        self.assertEqual(obs.shape, (Config.OBS_DIM,))
        self.assertFalse(term)
        self.assertFalse(trunc)
        self.assertEqual(reward, 0.0)
        for key in ("rew_score", "rew_damage", "rew_game_over", "termination_reason"):
            self.assertIn(key, info)

    def test_enemy_features_after_formation(self):
        self.env.reset(seed=2)
        for _ in range(2):
            obs, *_ = self.env.step(np.zeros(Config.ACTION_DIM))

        enemy_block = obs[Config.PLAYER_FEAT_DIM:]
        self.assertTrue(np.any(enemy_block != 0.0))
        # Formation enemies start dormant
        self.assertEqual(enemy_block[4], 1.0)

    def test_health_feature_uses_starting_health(self):
        self.env.reset(seed=2)
        for _ in range(2):
            self.env.step(np.zeros(Config.ACTION_DIM))
        hunter = next(e for e in self.env.core.enemies if e.archetype == Archetype.HUNTER)
        self.assertEqual(hunter.health, 5)
        self.assertEqual(self.env._vectorize(hunter)[5], 1.0)

        hunter.health = 1
        self.assertAlmostEqual(self.env._vectorize(hunter)[5], 0.2)

        obs = self.env._get_obs()
        health = obs[Config.PLAYER_FEAT_DIM + 5::Config.ENEMY_FEAT_DIM]
        self.assertTrue(np.all(health <= 1.0))

    def test_crash_terminates_with_penalty(self):
        env = SkyFighterEnv(use_city=False)
        env.reset(seed=0)
        env.core.player.pos[2] = 4.0

        _, reward, term, trunc, info = env.step(np.zeros(Config.ACTION_DIM))

        self.assertTrue(term)
        self.assertFalse(trunc)
        self.assertEqual(info["termination_reason"], "crashed")
        self.assertAlmostEqual(reward, -Config.GAME_OVER_PENALTY - 10.0)

    def test_truncates_at_tick_limit(self):
        env = SkyFighterEnv(use_city=False)
        env.reset(seed=0)
        env.core.tick = Config.MAX_TICKS - 1

        _, _, term, trunc, info = env.step(np.zeros(Config.ACTION_DIM))

        self.assertFalse(term)
        self.assertTrue(trunc)
        self.assertEqual(info["termination_reason"], "timeout")

    def test_bad_action(self):
        self.env.reset(seed=0)
        with self.assertRaises(ValueError):
            self.env.step(np.zeros(3))
        with self.assertRaises(ValueError):
            self.env.step(np.array([np.nan, 0, 0, 0, 0]))

    def test_action_mapping(self):
        self.env.reset(seed=0)
        inp = self.env._to_input(np.array([2.0, -0.5, 0.1, 0.5, -0.5]))
        self.assertEqual(inp.pitch, 1.0)
        self.assertEqual(inp.turn, -0.5)
        self.assertTrue(inp.fire)
        self.assertFalse(inp.rear_view)


if __name__ == '__main__':
    unittest.main()
