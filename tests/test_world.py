import unittest
import numpy as np
from skyfighter.entities import Building
from skyfighter.world import World


class TestWorld(unittest.TestCase):
    def setUp(self):
        self.tower = Building(x=0.0, y=0.0, half_w=10.0, half_d=10.0, height=50.0)
        self.world = World([self.tower, Building(x=100.0, y=0.0, half_w=5.0, half_d=5.0, height=20.0)])

    def test_occludes_strictly_inside(self):
        self.assertTrue(self.world.occludes(np.array([5.0, 5.0, 25.0])))
        self.assertFalse(self.world.occludes(np.array([10.0, 0.0, 25.0])))   # On the wall
        self.assertFalse(self.world.occludes(np.array([0.0, 0.0, 50.0])))    # On the roof
        self.assertFalse(self.world.occludes(np.array([0.0, 0.0, 60.0])))

    def test_building_at_with_margins(self):
        p = np.array([12.0, 0.0, 53.0])
        self.assertIsNone(self.world.building_at(p))
        self.assertIs(self.world.building_at(p, margin=3.0, height_margin=5.0), self.tower)

    def test_find_nearest_building(self):
        self.assertIs(self.world.find_nearest_building(np.array([30.0, 0.0, 10.0]), 100.0), self.tower)
        self.assertIsNone(self.world.find_nearest_building(np.array([50.0, 200.0, 10.0]), 100.0))

    def test_city_is_deterministic(self):
        a = World.city(np.random.default_rng(5))
        b = World.city(np.random.default_rng(5))
        self.assertEqual(a.buildings, b.buildings)
        self.assertTrue(all(20.0 <= bld.height <= 120.0 for bld in a.buildings))
        self.assertEqual(World.empty().buildings, [])


if __name__ == '__main__':
    unittest.main()
