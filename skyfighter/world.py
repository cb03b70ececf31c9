import numpy as np
from config import Config
from skyfighter.entities import Building
from skyfighter.utils.math3d import dist_2d


class World:
    """
    Static obstacle geometry read by the flight controller, the projectile
    system and the hiding behavior. Never mutated during a session.
    """

    def __init__(self, buildings=None, ground_level=None):
        self.cfg = Config
        self.buildings = list(buildings or [])
        self.ground_level = self.cfg.GROUND_LEVEL if ground_level is None else ground_level

    @classmethod
    def empty(cls):
        return cls([])

    @classmethod
    def city(cls, rng=None):
        """
        Build the default city: a grid of blocks separated by streets,
        2-4 buildings per block, each offset randomly inside its block.
        """
        cfg = Config
        rng = rng if rng is not None else np.random.default_rng()
        buildings = []
        step = cfg.CITY_BLOCK_SIZE + cfg.CITY_STREET_WIDTH
        half_city = cfg.CITY_SIZE / 2

        bx = -half_city
        while bx < half_city:
            by = -half_city
            while by < half_city:
                for _ in range(2 + int(rng.random() * 3)):
                    width = 15 + rng.random() * 25
                    depth = 15 + rng.random() * 25
                    height = 20 + rng.random() * 100
                    off_x = (rng.random() - 0.5) * (cfg.CITY_BLOCK_SIZE - width)
                    off_y = (rng.random() - 0.5) * (cfg.CITY_BLOCK_SIZE - depth)
                    buildings.append(Building(
                        x=bx + off_x, y=by + off_y,
                        half_w=width / 2, half_d=depth / 2, height=height
                    ))
                by += step
            bx += step
        return cls(buildings)

    def building_at(self, pos, margin=0.0, height_margin=0.0):
        """
        First building whose (expanded) footprint contains pos horizontally
        and whose top (plus height_margin) is above pos. None if clear.
        """
        x, y, alt = pos[0], pos[1], pos[2]
        for b in self.buildings:
            if b.contains(x, y, margin) and alt < self.ground_level + b.height + height_margin:
                return b
        return None

    def occludes(self, pos):
        """True if pos is strictly inside a building volume (bullet stopper)."""
        x, y, alt = pos[0], pos[1], pos[2]
        for b in self.buildings:
            if b.contains(x, y) and self.ground_level < alt < self.ground_level + b.height:
                return True
        return False

    def find_nearest_building(self, pos, radius):
        """Nearest building center within radius on the horizontal plane, or None."""
        nearest = None
        min_dist = float('inf')
        for b in self.buildings:
            d = dist_2d(pos[0], pos[1], b.x, b.y)
            if d < min_dist and d < radius:
                min_dist = d
                nearest = b
        return nearest
