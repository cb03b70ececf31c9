# Plain simulation records. Visual composition (meshes, materials, particles)
# belongs to the rendering layer; only simulation-relevant fields live here.
import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Archetype(str, Enum):
    DRONE = "drone"
    HUNTER = "hunter"
    TANK = "tank"
    BOSS = "boss"


class Phase(str, Enum):
    DORMANT = "dormant"
    ACTIVE = "active"
    HIDING = "hiding"
    EVADING = "evading"


class Side(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"


@dataclass(frozen=True)
class ArchetypeStats:
    health: int           # Health when spawned by the procedural waves
    speed: float          # Units per tick when approaching the player
    score: int            # Awarded on kill
    hit_radius: float     # Player bullets closer than this hit
    shoot_interval: float # Seconds between shots once the timer elapses


ARCHETYPES = {
    Archetype.DRONE: ArchetypeStats(health=1, speed=0.5, score=100, hit_radius=3.0,
                                    shoot_interval=1.5),
    Archetype.HUNTER: ArchetypeStats(health=2, speed=0.8, score=150, hit_radius=3.0,
                                     shoot_interval=1.5),
    Archetype.TANK: ArchetypeStats(health=8, speed=0.4, score=300, hit_radius=5.0,
                                   shoot_interval=1.0),
    Archetype.BOSS: ArchetypeStats(health=30, speed=0.3, score=1000, hit_radius=8.0,
                                   shoot_interval=0.5),
}


def archetype_stats(archetype):
    """Look up the stat row for an archetype (enum member or its name)."""
    try:
        return ARCHETYPES[Archetype(archetype)]
    except ValueError:
        raise ValueError(f"Unknown archetype: {archetype!r}") from None


@dataclass
class InputSnapshot:
    """
    Normalized control input for one tick, produced by the input layer.
    Axes are in [-1, 1]: pitch > 0 is nose up, turn > 0 is a right turn,
    throttle > 0 boosts and throttle < 0 brakes.
    """
    pitch: float = 0.0
    turn: float = 0.0
    throttle: float = 0.0
    fire: bool = False
    rear_view: bool = False


@dataclass
class PlayerState:
    pos: np.ndarray
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0          # Cosmetic lean, radians
    throttle: float = 0.25
    rear_view: bool = False
    shoot_cooldown: int = 0    # Ticks until the next shot is accepted
    auto_aim_active: bool = False


@dataclass
class Building:
    x: float              # Footprint center
    y: float
    half_w: float         # Half extent along x
    half_d: float         # Half extent along y
    height: float

    def contains(self, x, y, margin=0.0):
        return (self.x - self.half_w - margin < x < self.x + self.half_w + margin and
                self.y - self.half_d - margin < y < self.y + self.half_d + margin)


@dataclass
class Enemy:
    uid: int
    archetype: Archetype
    health: int
    pos: np.ndarray
    shoot_timer: float                  # Seconds until next shot
    phase: Phase = Phase.ACTIVE
    base_alt: float = 0.0               # Bob center while dormant
    move_angle: float = 0.0             # Bob phase offset
    fly_angle: float = 0.0              # Wobble phase accumulator
    dormant: bool = False
    hide_target: Optional[Building] = None
    hide_timer: float = 0.0             # Hide duration while hiding, cooldown otherwise
    glyph: Optional[str] = None         # Source glyph for formation enemies
    max_health: int = 0                 # Health at creation (defaults to health)

    # Facing (radians), recomputed every active tick
    yaw: float = 0.0
    tilt: float = 0.0

    # Wave intensity, applied at most once per enemy
    scaled: bool = False
    intensity: float = 0.0
    scale: float = 1.0
    aura: bool = False
    effect: Optional[str] = None        # "fire" or "lightning"

    def __post_init__(self):
        if not self.max_health:
            self.max_health = self.health

    @property
    def stats(self):
        return ARCHETYPES[self.archetype]

    @property
    def hiding(self):
        return self.hide_target is not None


@dataclass
class Bullet:
    side: Side
    pos: np.ndarray
    vel: np.ndarray
    life: int             # Ticks remaining


@dataclass
class RecoveryItem:
    pos: np.ndarray
    rotation_speed: float = 0.03
    float_offset: float = 0.0
    spin: float = 0.0


@dataclass
class Snapshot:
    """Read-only state published to the presentation layer after each tick."""
    tick: int
    score: int
    lives: int
    wave: int
    enemy_count: int
    terminal: bool
    cause: Optional[str] = None
    auto_aim_active: bool = False
    events: list = field(default_factory=list)
