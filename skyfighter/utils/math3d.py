import math
import numpy as np

# Vectors are numpy arrays ordered (x, y, alt).


def dist_3d(a, b):
    """Euclidean distance between two 3D points."""
    return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))


def dist_2d(x1, y1, x2, y2):
    """Euclidean distance on the horizontal plane."""
    return math.hypot(x2 - x1, y2 - y1)


def normalize(v, eps=1e-8):
    """Unit vector along v (zero vector if v is degenerate)."""
    v = np.asarray(v, dtype=float)
    n = np.linalg.norm(v)
    if n < eps:
        return np.zeros_like(v)
    return v / n


def forward_vector(yaw, pitch):
    """
    Flight direction for the given orientation.
    yaw = 0, pitch = 0 points along -y; positive pitch is nose up.
    Roll is a cosmetic lean and does not change the flight path.
    """
    cp = math.cos(pitch)
    return np.array([-math.sin(yaw) * cp, -math.cos(yaw) * cp, math.sin(pitch)])


def horizontal_forward(yaw):
    """Forward direction flattened onto the horizontal plane."""
    return np.array([-math.sin(yaw), -math.cos(yaw), 0.0])
