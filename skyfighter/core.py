import numpy as np
from config import Config
from skyfighter.behavior import EnemyBehaviorEngine
from skyfighter.entities import InputSnapshot, PlayerState, Snapshot
from skyfighter.flight import FlightController
from skyfighter.pickups import update_items
from skyfighter.projectiles import ProjectileSystem
from skyfighter.state import GameState
from skyfighter.waves import WaveDirector
from skyfighter.world import World


class SkyFighterCore:
    """
    Simulation context: owns every entity collection and runs one tick per
    rendered frame. Components receive the core by reference, in a fixed order:

        Flight -> Projectiles -> Enemies -> Recovery items -> Waves -> Game state

    Once the game state is terminal the remaining stages of the tick are
    skipped, and later ticks only republish the final snapshot.
    """

    def __init__(self, world=None, rng=None, seed=None):
        """
        Args:
            world: Static obstacle geometry (defaults to an empty world)
            rng: Random source exposing random() and uniform(low, high).
                 Defaults to numpy's Generator seeded with `seed`.
            seed: Seed for the default random source
        """
        self.cfg = Config
        self.world = world if world is not None else World.empty()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.player = PlayerState(pos=np.array(self.cfg.PLAYER_START, dtype=float),
                                  throttle=self.cfg.THROTTLE_START)
        self.state = GameState()
        self.enemies = []
        self.bullets = []
        self.items = []
        self.events = []                 # One-shot signals raised during the current tick

        self.tick = 0
        self.time = 0.0                  # Seconds since start
        self._next_uid = 1
        self._result_emitted = False

        self.flight = FlightController()
        self.projectiles = ProjectileSystem()
        self.behavior = EnemyBehaviorEngine(self.projectiles)
        self.waves = WaveDirector()

    def next_uid(self):
        uid = self._next_uid
        self._next_uid += 1
        return uid

    @property
    def terminal(self):
        return self.state.terminal

    @property
    def result(self):
        """Final score/wave pair, available once the game is over."""
        return self.state.result

    def step(self, inp=None):
        """
        Advance the simulation by one tick.

        Args:
            inp: InputSnapshot for this tick (None = hands off the stick)

        Returns:
            Snapshot: State to hand to the presentation layer
        """
        self.events = []
        if self.state.terminal:
            return self.snapshot()

        inp = inp if inp is not None else InputSnapshot()
        self.tick += 1
        self.time += self.cfg.TICK_DT

        # A crash ends the tick right here
        crashed = self.flight.update(self, inp)

        if not crashed:
            self.projectiles.handle_player_fire(self, inp)
            self.projectiles.update(self)

        if not self.state.terminal:
            self.behavior.update(self)

        if not self.state.terminal:
            update_items(self, self.cfg)
            self.waves.update(self)

        self._check_game_over()
        return self.snapshot()

    def _check_game_over(self):
        """Emit the final result exactly once, on the tick the game ends."""
        if not self.state.terminal or self._result_emitted:
            return
        self._result_emitted = True
        result = self.state.result
        self.events.append({
            "type": "game_over",
            "cause": result.cause.value,
            "score": result.score,
            "wave": result.wave,
        })

    def snapshot(self):
        return Snapshot(
            tick=self.tick,
            score=self.state.score,
            lives=self.state.lives,
            wave=self.state.wave,
            enemy_count=len(self.enemies),
            terminal=self.state.terminal,
            cause=self.state.cause.value if self.state.cause else None,
            auto_aim_active=self.player.auto_aim_active,
            events=list(self.events),
        )
