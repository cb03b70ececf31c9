import math
import numpy as np
from config import Config
from skyfighter.entities import InputSnapshot
from skyfighter.utils.math3d import dist_3d, forward_vector, normalize


class Autopilot:
    """
    Scripted pilot that flies the player aircraft.

    Priorities:
    - Survive: pull up near the ground or a rooftop, level off at the ceiling.
    - Attack: turn onto the nearest enemy and fire once it is roughly ahead.
    - Patrol: hold cruise altitude when there is nothing to shoot.

    Reads the core state directly and answers with an InputSnapshot, so it
    can stand in for the input layer in headless runs and tests.
    """
    def __init__(self, cruise_alt=120.0, min_alt=40.0, fire_alignment=0.9):
        self.cfg = Config
        self.cruise_alt = cruise_alt
        self.min_alt = min_alt
        self.fire_alignment = fire_alignment

    def get_input(self, core):
        player = core.player
        alt = player.pos[2]

        # === 1. SURVIVE ===
        clearance = alt - self._floor_below(core)
        if clearance < self.min_alt:
            return InputSnapshot(pitch=1.0, throttle=-1.0)

        # === 2. ATTACK ===
        if core.enemies:
            target = min(core.enemies, key=lambda e: dist_3d(player.pos, e.pos))
            return self._pursue(player, target)

        # === 3. PATROL ===
        return self._hold_altitude(player, self.cruise_alt)

    def _floor_below(self, core):
        """Ground level, or the roof of a building we are about to overfly."""
        ahead = core.player.pos + forward_vector(core.player.yaw, core.player.pitch) * 20.0
        b = core.world.building_at(ahead, margin=self.cfg.CRASH_FOOTPRINT_MARGIN,
                                   height_margin=self.min_alt)
        if b is not None:
            return core.world.ground_level + b.height
        return core.world.ground_level

    def _pursue(self, player, target):
        to_target = target.pos - player.pos
        dist = float(np.linalg.norm(to_target))

        # Heading error on the horizontal plane
        desired_yaw = math.atan2(-to_target[0], -to_target[1])
        yaw_err = (desired_yaw - player.yaw + math.pi) % (2 * math.pi) - math.pi
        turn = float(np.clip(-yaw_err * 4.0, -1.0, 1.0))

        desired_pitch = math.atan2(to_target[2], math.hypot(to_target[0], to_target[1]))
        desired_pitch = float(np.clip(desired_pitch, -0.5, 0.5))
        pitch = float(np.clip((desired_pitch - player.pitch) * 10.0, -1.0, 1.0))

        alignment = float(np.dot(forward_vector(player.yaw, player.pitch), normalize(to_target)))
        fire = alignment > self.fire_alignment and dist < self.cfg.AUTO_AIM_RANGE

        # Boost to close distance, brake when on top of the target
        throttle = 1.0 if dist > 80.0 else -1.0
        return InputSnapshot(pitch=pitch, turn=turn, throttle=throttle, fire=fire)

    def _hold_altitude(self, player, target_alt):
        desired_pitch = float(np.clip((target_alt - player.pos[2]) * 0.01, -0.3, 0.3))
        pitch = float(np.clip((desired_pitch - player.pitch) * 10.0, -1.0, 1.0))
        return InputSnapshot(pitch=pitch, throttle=0.0)
