import numpy as np
from config import Config
from skyfighter.utils.math3d import normalize


def aim_score(alignment, distance, cfg=Config):
    """Auto-aim preference: well aligned beats close, distance is a tie breaker."""
    return alignment * cfg.AUTO_AIM_ALIGNMENT_WEIGHT - distance * cfg.AUTO_AIM_DISTANCE_WEIGHT


def select_target(origin, view_dir, enemies, cfg=Config):
    """
    Pick the auto-aim target for an outgoing player shot.

    Enemies beyond AUTO_AIM_RANGE or outside the alignment cone
    (cos < AUTO_AIM_MIN_ALIGNMENT) are skipped. Computed fresh on every
    shot; there is no lock-on memory.

    Args:
        origin: Shooter position
        view_dir: Direction the shooter is looking along
        enemies: Iterable of live enemies

    Returns:
        The highest scoring enemy, or None if nothing qualifies.
    """
    view_dir = normalize(view_dir)
    best, best_score = None, -np.inf

    for e in enemies:
        to_enemy = e.pos - origin
        distance = float(np.linalg.norm(to_enemy))
        if distance > cfg.AUTO_AIM_RANGE:
            continue

        alignment = float(np.dot(view_dir, normalize(to_enemy)))
        if alignment < cfg.AUTO_AIM_MIN_ALIGNMENT:
            continue

        score = aim_score(alignment, distance, cfg)
        if score > best_score:
            best_score = score
            best = e

    return best
