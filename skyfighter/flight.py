import math
import numpy as np
from config import Config
from skyfighter.utils.math3d import forward_vector
from skyfighter.utils.map_limits import MapLimits


class FlightController:
    """
    Integrates the player's control input into orientation, throttle and
    position, and detects terrain/building crashes.

    Arcade model: the aircraft always flies along its nose at a speed set
    purely by throttle. There is no lift, drag or stall.
    """

    def __init__(self):
        self.cfg = Config
        self.map_limits = MapLimits.square(self.cfg.WORLD_BOUNDARY)
        self.max_pitch = math.radians(self.cfg.MAX_PITCH_DEG)

    def speed(self, player):
        """Current airspeed in units per tick."""
        return self.cfg.MIN_SPEED + player.throttle * (self.cfg.MAX_SPEED - self.cfg.MIN_SPEED)

    def update(self, core, inp):
        """
        Advance the player one tick.

        Args:
            core: Simulation context owning the player, world and game state
            inp: InputSnapshot for this tick

        Returns:
            bool: True if the player crashed this tick
        """
        player = core.player
        player.rear_view = bool(inp.rear_view)

        # === ATTITUDE ===
        player.pitch += np.clip(inp.pitch, -1.0, 1.0) * self.cfg.PITCH_RATE
        turn = float(np.clip(inp.turn, -1.0, 1.0))
        if turn != 0.0:
            player.yaw -= turn * self.cfg.YAW_RATE
            player.roll = float(np.clip(player.roll - turn * self.cfg.ROLL_RATE,
                                        -self.cfg.MAX_ROLL, self.cfg.MAX_ROLL))
        else:
            player.roll *= self.cfg.ROLL_DECAY  # Return to level

        # === THROTTLE ===
        if inp.throttle > 0:
            player.throttle = min(player.throttle + self.cfg.THROTTLE_STEP, self.cfg.MAX_THROTTLE)
        elif inp.throttle < 0:
            player.throttle = max(player.throttle - self.cfg.THROTTLE_STEP, self.cfg.MIN_THROTTLE)

        player.pitch = float(np.clip(player.pitch, -self.max_pitch, self.max_pitch))

        # === MOVEMENT ===
        player.pos = player.pos + forward_vector(player.yaw, player.pitch) * self.speed(player)

        # === CRASH CHECKS ===
        # Either crash ends the controller's work for this tick.
        if player.pos[2] < core.world.ground_level + self.cfg.CRASH_ALTITUDE:
            self._crash(core, "ground")
            return True

        building = core.world.building_at(player.pos,
                                          margin=self.cfg.CRASH_FOOTPRINT_MARGIN,
                                          height_margin=self.cfg.CRASH_HEIGHT_MARGIN)
        if building is not None:
            self._crash(core, "building")
            return True

        # === CEILING ===
        if player.pos[2] > self.cfg.ALTITUDE_CEILING:
            player.pos[2] = self.cfg.ALTITUDE_CEILING
            if player.pitch > 0:
                player.pitch *= self.cfg.CEILING_PITCH_DAMPING

        # === WORLD WRAP ===
        player.pos[0], player.pos[1] = self.map_limits.wrap(player.pos[0], player.pos[1])
        return False

    def _crash(self, core, obstacle):
        core.state.crash()
        core.events.append({"type": "crash", "obstacle": obstacle, "pos": core.player.pos.copy()})
