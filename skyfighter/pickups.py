import math
from config import Config
from skyfighter.utils.math3d import dist_3d


def update_items(core, cfg=Config):
    """Float/spin recovery items and collect any within pickup range of the player."""
    remaining = []
    for item in core.items:
        item.spin += item.rotation_speed
        item.pos[2] += math.sin(core.time * 3 + item.float_offset) * 0.05

        if dist_3d(item.pos, core.player.pos) < cfg.PICKUP_RADIUS:
            before = core.state.lives
            core.state.heal(cfg.HEAL_AMOUNT)
            core.events.append({"type": "heal", "amount": core.state.lives - before})
        else:
            remaining.append(item)
    core.items = remaining
