import unittest
import numpy as np
from config import Config
from skyfighter.entities import Archetype, Building, InputSnapshot, Side
from skyfighter.state import Cause
from skyfighter.utils.math3d import normalize
from skyfighter.world import World
from sim_helpers import ScriptedRandom, add_enemy, make_core


class TestPlayerFire(unittest.TestCase):
    def setUp(self):
        self.core = make_core()
        self.proj = self.core.projectiles
        self.player = self.core.player

    def test_fire_respects_cooldown(self):
        fired_on = []
        for t in range(13):
            if self.proj.handle_player_fire(self.core, InputSnapshot(fire=True)) is not None:
                fired_on.append(t)

        self.assertEqual(fired_on, [0, 6, 12])
        self.assertEqual(len(self.core.bullets), 3)

    def test_unaimed_shot_goes_along_nose(self):
        bullet = self.proj.handle_player_fire(self.core, InputSnapshot(fire=True))

        np.testing.assert_allclose(bullet.vel, [0.0, -Config.PLAYER_BULLET_SPEED, 0.0], atol=1e-9)
        self.assertEqual(bullet.side, Side.PLAYER)
        self.assertFalse(self.player.auto_aim_active)
        self.assertEqual(self.core.events[-1]["type"], "shot")

    def test_auto_aim_toward_target(self):
        e = add_enemy(self.core, pos=(20.0, 200.0, 160.0))

        bullet = self.proj.handle_player_fire(self.core, InputSnapshot(fire=True))

        expected = normalize(e.pos - self.player.pos) * Config.PLAYER_BULLET_SPEED
        np.testing.assert_allclose(bullet.vel, expected, atol=1e-9)
        self.assertTrue(self.player.auto_aim_active)
        self.assertEqual(self.core.events[-1]["target"], e.uid)

    def test_auto_aim_indicator_clears(self):
        add_enemy(self.core, pos=(0.0, 200.0, 150.0))
        self.proj.handle_player_fire(self.core, InputSnapshot(fire=True))

        for _ in range(Config.SHOOT_COOLDOWN_TICKS - Config.AUTO_AIM_HOLD_TICKS - 1):
            self.proj.handle_player_fire(self.core, InputSnapshot())
        self.assertTrue(self.player.auto_aim_active)

        self.proj.handle_player_fire(self.core, InputSnapshot())
        self.assertFalse(self.player.auto_aim_active)

    def test_rear_view_fires_backward(self):
        self.player.rear_view = True
        bullet = self.proj.handle_player_fire(self.core, InputSnapshot(fire=True, rear_view=True))

        np.testing.assert_allclose(bullet.vel, [0.0, Config.PLAYER_BULLET_SPEED, 0.0], atol=1e-9)


class TestBulletResolution(unittest.TestCase):
    def setUp(self):
        self.rng = ScriptedRandom()
        self.core = make_core(rng=self.rng)
        self.proj = self.core.projectiles

    def player_bullet_at(self, pos):
        # Zero velocity keeps the bullet exactly where it is placed
        b = self.proj.spawn(self.core, Side.PLAYER, pos, np.array([1.0, 0.0, 0.0]))
        b.vel = np.zeros(3)
        return b

    def test_drone_kill(self):
        self.core.state.pending = 1
        drone = add_enemy(self.core, pos=(0.0, 0.0, 100.0))
        self.player_bullet_at(drone.pos)

        self.proj.update(self.core)

        self.assertEqual(self.core.enemies, [])
        self.assertEqual(drone.health, 0)
        self.assertEqual(self.core.state.score, 100)
        self.assertEqual(self.core.state.pending, 0)
        self.assertEqual(self.core.bullets, [])
        types = [e["type"] for e in self.core.events]
        self.assertIn("kill", types)
        self.assertIn("explosion", types)
        # Drop roll consumed one random value and missed
        self.assertEqual(self.rng.calls, 1)
        self.assertEqual(self.core.items, [])

    def test_kill_drops_recovery_item(self):
        self.rng.values = [0.1, 0.5, 0.0]
        drone = add_enemy(self.core, pos=(0.0, 0.0, 10.0))
        self.player_bullet_at(drone.pos)

        self.proj.update(self.core)

        self.assertEqual(len(self.core.items), 1)
        item = self.core.items[0]
        self.assertEqual(item.pos[2], Config.ITEM_MIN_ALT)
        self.assertAlmostEqual(item.rotation_speed, 0.03)

    def test_boss_uses_higher_drop_chance(self):
        self.rng.values = [0.3]
        boss = add_enemy(self.core, Archetype.BOSS, pos=(0.0, 0.0, 100.0), health=1)
        self.player_bullet_at(boss.pos)

        self.proj.update(self.core)

        self.assertEqual(self.core.state.score, 1000)
        self.assertEqual(len(self.core.items), 1)

    def test_tank_hit_without_kill(self):
        tank = add_enemy(self.core, Archetype.TANK, pos=(0.0, 0.0, 100.0))
        # Inside the tank's larger hit radius
        self.player_bullet_at(tank.pos + np.array([4.0, 0.0, 0.0]))

        self.proj.update(self.core)

        self.assertEqual(tank.health, 7)
        self.assertEqual(self.core.enemies, [tank])
        self.assertEqual(self.core.events[-1], {"type": "hit", "enemy": tank.uid})
        self.assertEqual(self.core.bullets, [])

    def test_first_enemy_in_order_takes_the_hit(self):
        a = add_enemy(self.core, Archetype.TANK, pos=(0.0, 0.0, 100.0))
        b = add_enemy(self.core, Archetype.TANK, pos=(1.0, 0.0, 100.0))
        self.player_bullet_at((0.5, 0.0, 100.0))

        self.proj.update(self.core)

        self.assertEqual(a.health, 7)
        self.assertEqual(b.health, 8)

    def test_enemy_bullet_damages_player(self):
        b = self.proj.spawn(self.core, Side.ENEMY, self.core.player.pos, np.array([0.0, 1.0, 0.0]))
        b.vel = np.zeros(3)

        self.proj.update(self.core)

        self.assertEqual(self.core.state.lives, 100 - Config.ENEMY_BULLET_DAMAGE)
        self.assertEqual(self.core.events[-1]["type"], "damage")

    def test_building_blocks_bullet(self):
        self.core.world = World([Building(x=10.0, y=0.0, half_w=5.0, half_d=5.0, height=150.0)])
        drone = add_enemy(self.core, pos=(10.0, 0.0, 100.0))
        self.player_bullet_at(drone.pos)

        self.proj.update(self.core)

        self.assertEqual(self.core.bullets, [])
        self.assertEqual(self.core.enemies, [drone])
        self.assertEqual(drone.health, 1)

    def test_bullet_expires(self):
        self.proj.spawn(self.core, Side.PLAYER, (0.0, 0.0, 100.0), np.array([1.0, 0.0, 0.0]))
        for _ in range(Config.PLAYER_BULLET_LIFE - 1):
            self.proj.update(self.core)
        self.assertEqual(len(self.core.bullets), 1)

        self.proj.update(self.core)
        self.assertEqual(self.core.bullets, [])

    def test_bullet_above_ceiling_removed(self):
        self.proj.spawn(self.core, Side.PLAYER, (0.0, 0.0, Config.BULLET_MAX_ALT - 1.0),
                        np.array([0.0, 0.0, 1.0]))
        self.proj.update(self.core)
        self.assertEqual(self.core.bullets, [])

    def test_lethal_hit_freezes_remaining_bullets(self):
        self.core.state.lives = Config.ENEMY_BULLET_DAMAGE
        for _ in range(2):
            b = self.proj.spawn(self.core, Side.ENEMY, self.core.player.pos, np.array([0.0, 1.0, 0.0]))
            b.vel = np.zeros(3)

        self.proj.update(self.core)

        self.assertEqual(self.core.state.cause, Cause.DESTROYED)
        self.assertEqual(self.core.state.lives, 0)
        self.assertEqual(len(self.core.bullets), 1)


if __name__ == '__main__':
    unittest.main()
