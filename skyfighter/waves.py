import math
import numpy as np
from collections import deque
from dataclasses import dataclass
from config import Config
from skyfighter.behavior import apply_wave_intensity
from skyfighter.entities import Archetype, Enemy, Phase, archetype_stats

# === OPENING FORMATION ===
# Each row: (text, altitude, depth, glyph spacing). Depth is the y coordinate,
# in front of the player's start position.
FORMATION_ROWS = (
    ("HAPPY NEW YEAR", 200.0, -100.0, 12.0),
    ("2026", 160.0, -100.0, 12.0),
    ("今年もよろしくお願いします", 140.0, -150.0, 10.0),
)
TANK_GLYPHS = frozenset("HNYR")

FORMATION_HEALTH = {
    Archetype.BOSS: 20,
    Archetype.TANK: 10,
    Archetype.HUNTER: 5,
}


def glyph_archetype(glyph):
    """Numerals are bosses, H/N/Y/R are tanks, every other glyph is a hunter."""
    if glyph.isdigit():
        return Archetype.BOSS
    if glyph in TANK_GLYPHS:
        return Archetype.TANK
    return Archetype.HUNTER


def formation_layout():
    """
    Positions of every formation glyph as (glyph, x, y, alt), rows centered on x = 0.
    Spaces are skipped.
    """
    layout = []
    for text, alt, depth, spacing in FORMATION_ROWS:
        glyphs = [c for c in text if c != ' ']
        x = -((len(glyphs) - 1) * spacing) / 2
        for glyph in glyphs:
            layout.append((glyph, x, depth, alt))
            x += spacing
    return layout


def wave_size(wave, cfg=Config):
    return cfg.BASE_WAVE_SIZE + cfg.WAVE_SIZE_PER_WAVE * wave


def roll_archetype(wave, r, cfg=Config):
    """Map one uniform roll r in [0, 1) to an archetype, gated by wave number."""
    min_wave, p = cfg.BOSS_GATE
    if wave >= min_wave and r < p:
        return Archetype.BOSS
    min_wave, p = cfg.TANK_GATE
    if wave >= min_wave and r < p:
        return Archetype.TANK
    min_wave, p = cfg.HUNTER_GATE
    if wave >= min_wave and r < p:
        return Archetype.HUNTER
    return Archetype.DRONE


class FormationLoader:
    """
    Stands in for the asynchronous glyph asset load. start() kicks it off;
    the director polls ready() each tick instead of blocking.
    """

    def __init__(self, load_ticks):
        self.load_ticks = load_ticks
        self.ready_at = None

    @property
    def started(self):
        return self.ready_at is not None

    def start(self, tick):
        if self.ready_at is None:
            self.ready_at = tick + self.load_ticks

    def ready(self, tick):
        return self.ready_at is not None and tick >= self.ready_at


@dataclass
class SpawnOrder:
    fire_at: int              # Tick at which the enemy materializes
    archetype: Archetype


class WaveDirector:
    """
    Sequences the one-off scripted formation, then procedurally sized waves.

    Procedural spawns are queued as SpawnOrders and drained by tick number,
    so staggered spawning needs no timers or callbacks.
    """

    def __init__(self, loader=None):
        self.cfg = Config
        self.loader = loader or FormationLoader(self.cfg.FORMATION_LOAD_TICKS)
        self.formation_done = False
        self.queue = deque()

    def update(self, core):
        if core.state.terminal:
            return

        # === FORMATION PHASE (once) ===
        if not self.formation_done:
            if not self.loader.started:
                self.loader.start(core.tick)
            if self.loader.ready(core.tick):
                self._materialize_formation(core)
                self.formation_done = True
            return

        self._drain_queue(core)

        # === PROCEDURAL PHASE ===
        if not core.enemies and core.state.pending == 0 and not self.queue:
            self.schedule_wave(core)

    def schedule_wave(self, core):
        """
        Queue the next wave, then bump the wave number right away.
        Archetypes are rolled against the bumped number.
        """
        size = wave_size(core.state.wave, self.cfg)
        core.state.advance_wave()
        wave = core.state.wave
        for i in range(size):
            archetype = roll_archetype(wave, core.rng.random(), self.cfg)
            self.queue.append(SpawnOrder(fire_at=core.tick + i * self.cfg.SPAWN_INTERVAL_TICKS,
                                         archetype=archetype))
        core.events.append({"type": "wave", "wave": wave, "size": size})
        return size

    def _drain_queue(self, core):
        while self.queue and self.queue[0].fire_at <= core.tick:
            order = self.queue.popleft()
            if core.state.terminal:
                # Cancelled: deferred spawns never outlive the game
                self.queue.clear()
                return
            self.spawn_enemy(core, order.archetype)

    def spawn_enemy(self, core, archetype):
        """Materialize one procedural enemy on a ring around the origin."""
        if core.state.terminal:
            return None

        archetype = Archetype(archetype)
        rng = core.rng
        angle = rng.random() * math.pi * 2
        dist = rng.uniform(*self.cfg.SPAWN_DISTANCE)
        alt = rng.uniform(*self.cfg.SPAWN_ALTITUDE)

        e = Enemy(
            uid=core.next_uid(),
            archetype=archetype,
            health=archetype_stats(archetype).health,
            pos=np.array([math.cos(angle) * dist, math.sin(angle) * dist, alt]),
            shoot_timer=1 + rng.random() * 2,
            base_alt=alt,
            move_angle=rng.random() * math.pi * 2,
            fly_angle=rng.random() * math.pi * 2,
        )
        apply_wave_intensity(e, core.state.wave, self.cfg)
        core.enemies.append(e)
        core.state.add_pending()
        return e

    def _materialize_formation(self, core):
        rng = core.rng
        created = 0
        for glyph, x, y, alt in formation_layout():
            archetype = glyph_archetype(glyph)
            core.enemies.append(Enemy(
                uid=core.next_uid(),
                archetype=archetype,
                health=FORMATION_HEALTH[archetype],
                pos=np.array([x, y, alt]),
                shoot_timer=2 + rng.random() * 3,
                phase=Phase.DORMANT,
                base_alt=alt,
                move_angle=rng.random() * math.pi * 2,
                fly_angle=rng.random() * math.pi * 2,
                dormant=True,
                glyph=glyph,
            ))
            created += 1
        core.state.pending = created
        core.events.append({"type": "formation", "size": created})
