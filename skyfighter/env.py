import math
import numpy as np
import gymnasium as gym
from gymnasium import spaces

from config import Config
from skyfighter.core import SkyFighterCore
from skyfighter.entities import Archetype, InputSnapshot
from skyfighter.utils.map_limits import MapLimits
from skyfighter.utils.math3d import dist_3d
from skyfighter.world import World

ARCHETYPE_CODES = {a: i / (len(Archetype) - 1) for i, a in enumerate(Archetype)}


class SkyFighterEnv(gym.Env):
    """
    Gymnasium wrapper around SkyFighterCore.

    Action: [pitch, turn, throttle, fire, rear_view] in [-1, 1].
    fire and rear_view are pressed when > 0.
    """
    metadata = {"render_modes": []}

    def __init__(self, use_city=True):
        super().__init__()
        self.cfg = Config
        self.use_city = use_city
        self.core = None
        self.map_limits = MapLimits.square(self.cfg.WORLD_BOUNDARY)

        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(self.cfg.ACTION_DIM,), dtype=np.float32)
        self.observation_space = spaces.Box(low=-np.inf, high=np.inf, shape=(self.cfg.OBS_DIM,), dtype=np.float32)

        self.last_score = 0
        self.last_lives = self.cfg.MAX_LIVES

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        rng = np.random.default_rng(seed)
        world = World.city(rng) if self.use_city else World.empty()
        self.core = SkyFighterCore(world=world, rng=rng)
        self.last_score = self.core.state.score
        self.last_lives = self.core.state.lives

        info = {"score": 0, "lives": self.last_lives, "wave": self.core.state.wave}
        return self._get_obs(), info

    def step(self, action):
        inp = self._to_input(action)
        snap = self.core.step(inp)

        reward, components = self._calculate_reward(snap)

        term = snap.terminal
        trunc = (not term) and self.core.tick >= self.cfg.MAX_TICKS
        reason = snap.cause if term else ("timeout" if trunc else "none")

        info = {
            "termination_reason": reason,
            "score": snap.score,
            "lives": snap.lives,
            "wave": snap.wave,
            "events": snap.events,
            "rew_score": components["score"],
            "rew_damage": components["damage"],
            "rew_game_over": components["game_over"],
        }
        return self._get_obs(), reward, term, trunc, info

    def _to_input(self, action):
        a = np.asarray(action, dtype=np.float64)
        if a.shape != (self.cfg.ACTION_DIM,):
            raise ValueError(f"Expected action of shape ({self.cfg.ACTION_DIM},), got {a.shape}")
        if not np.all(np.isfinite(a)):
            raise ValueError("Action contains non-finite values")
        a = np.clip(a, -1.0, 1.0)
        return InputSnapshot(
            pitch=float(a[0]),
            turn=float(a[1]),
            throttle=float(a[2]),
            fire=bool(a[3] > 0.0),
            rear_view=bool(a[4] > 0.0),
        )

    def _calculate_reward(self, snap):
        """
        Reward broken down by component for logging.
        """
        r_score = (snap.score - self.last_score) / 100.0
        r_damage = -max(0, self.last_lives - snap.lives) / 10.0
        r_game_over = -self.cfg.GAME_OVER_PENALTY if any(
            ev["type"] == "game_over" for ev in snap.events) else 0.0

        self.last_score = snap.score
        self.last_lives = snap.lives

        components = {"score": r_score, "damage": r_damage, "game_over": r_game_over}
        return r_score + r_damage + r_game_over, components

    def _get_obs(self):
        p = self.core.player
        s = self.core.state
        xn, yn = self.map_limits.relative_position(p.pos[0], p.pos[1])

        flat = [
            xn, yn, p.pos[2] / self.cfg.ALTITUDE_CEILING,
            math.cos(p.yaw), math.sin(p.yaw), p.pitch, p.throttle,
            s.lives / self.cfg.MAX_LIVES, s.wave / 10.0,
            1.0 if p.rear_view else 0.0,
        ]

        nearest = sorted(self.core.enemies, key=lambda e: dist_3d(p.pos, e.pos))
        for e in nearest[:self.cfg.ENV_K_ENEMIES]:
            flat.extend(self._vectorize(e))

        if len(flat) < self.cfg.OBS_DIM:
            flat.extend([0.0] * (self.cfg.OBS_DIM - len(flat)))
        return np.array(flat[:self.cfg.OBS_DIM], dtype=np.float32)

    def _vectorize(self, e):
        rel = (e.pos - self.core.player.pos) / 200.0
        return [
            rel[0], rel[1], rel[2],
            ARCHETYPE_CODES[e.archetype],
            1.0 if e.dormant else 0.0,
            e.health / max(e.max_health, 1),
        ]
