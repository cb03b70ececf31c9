"""
    Implements a square horizontal play area that wraps around on both axes
    (toroidal world). Altitude is handled by the flight controller.
"""

import numpy as np


class MapLimits:
    def __init__(self, min_x, max_x, min_y, max_y):
        self.min_x = min_x
        self.max_x = max_x
        self.min_y = min_y
        self.max_y = max_y

    @classmethod
    def square(cls, boundary):
        return cls(-boundary, boundary, -boundary, boundary)

    def x_extent(self):
        return self.max_x - self.min_x

    def y_extent(self):
        return self.max_y - self.min_y

    def relative_position(self, x, y):
        """Convert absolute x,y to relative [0,1] coordinates."""
        x_rel = (x - self.min_x) / self.x_extent()
        y_rel = (y - self.min_y) / self.y_extent()
        return np.clip(x_rel, 0, 1), np.clip(y_rel, 0, 1)

    def wrap(self, x, y):
        """
        Crossing an edge puts the point on the opposite edge.
        Each axis wraps independently.
        """
        if x > self.max_x:
            x = self.min_x
        elif x < self.min_x:
            x = self.max_x
        if y > self.max_y:
            y = self.min_y
        elif y < self.min_y:
            y = self.max_y
        return x, y
