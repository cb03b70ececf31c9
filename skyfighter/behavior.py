import math
import numpy as np
from config import Config
from skyfighter.entities import Archetype, Phase
from skyfighter.utils.math3d import horizontal_forward, normalize


def apply_wave_intensity(enemy, wave, cfg=Config):
    """
    Scale an enemy's presentation stats to the current wave.
    Guarded by enemy.scaled: a second call leaves the enemy unchanged.

    Returns:
        bool: True if the scaling was applied by this call
    """
    if enemy.scaled:
        return False

    intensity = min(wave / 5.0, 1.0)
    enemy.intensity = intensity
    enemy.scale = 1.0 + intensity * 0.3   # Up to 30% larger
    enemy.aura = wave >= 3
    if wave >= 5:
        enemy.effect = "lightning"
    elif wave >= 4:
        enemy.effect = "fire"
    enemy.scaled = True
    return True


def evasion_tier(wave):
    """0 = light drift, 1 = dodge + altitude change, 2 = aggressive escape."""
    m = min(wave / 5.0, 1.0)
    if m < 0.4:
        return 0
    if m < 0.8:
        return 1
    return 2


class EnemyBehaviorEngine:
    """
    Per-enemy state machine:

        DORMANT --(player within ACTIVATION_DISTANCE)--> ACTIVE
        ACTIVE  --(random roll near a building)-------> HIDING --(timer)--> ACTIVE
        ACTIVE/HIDING --(player rear view, enemy behind)--> EVADING

    Every non-dormant enemy faces the player and runs its own shoot timer.
    """

    def __init__(self, projectiles):
        self.cfg = Config
        self.projectiles = projectiles

    def update(self, core):
        for e in list(core.enemies):
            if core.state.terminal:
                return
            self.update_enemy(core, e)

    def update_enemy(self, core, e):
        player = core.player
        to_player = player.pos - e.pos
        dist = float(np.linalg.norm(to_player))
        to_player = normalize(to_player)

        # === DORMANT ===
        if e.dormant:
            e.pos[2] = e.base_alt + math.sin(core.time * 2 + e.move_angle) * self.cfg.DORMANT_BOB_AMPLITUDE
            if dist < self.cfg.ACTIVATION_DISTANCE:
                e.dormant = False
                e.phase = Phase.ACTIVE
                apply_wave_intensity(e, core.state.wave, self.cfg)
                core.events.append({"type": "enemy_awake", "enemy": e.uid})
            return

        speed = e.stats.speed

        e.fly_angle += self.cfg.FLY_ANGLE_STEP
        wobble_x = math.sin(e.fly_angle) * 0.3
        wobble_alt = math.cos(e.fly_angle * 0.7) * 0.2

        # Behind the player while it watches its six
        enemy_dir = normalize(e.pos - player.pos)
        behind = float(np.dot(horizontal_forward(player.yaw), enemy_dir)) < self.cfg.EVADE_BEHIND_DOT
        targeted = player.rear_view and behind and dist < self.cfg.EVADE_RANGE

        # === HIDING (non-boss) ===
        e.hide_timer -= self.cfg.TICK_DT
        if e.hiding and e.hide_timer <= 0:
            e.hide_target = None
            e.hide_timer = core.rng.uniform(*self.cfg.HIDE_COOLDOWN)
        elif (e.archetype != Archetype.BOSS and not e.hiding and e.hide_timer <= 0
              and core.rng.random() < self.cfg.HIDE_PROBABILITY):
            building = core.world.find_nearest_building(e.pos, self.cfg.HIDE_SEARCH_RADIUS)
            if building is not None:
                e.hide_target = building
                e.hide_timer = core.rng.uniform(*self.cfg.HIDE_DURATION)

        # === MOVEMENT ===
        if targeted:
            e.phase = Phase.EVADING
            self._evade(core, e, to_player, speed)
        elif e.hiding:
            e.phase = Phase.HIDING
            self._hide(core, e)
        else:
            e.phase = Phase.ACTIVE
            if dist > self.cfg.CLOSE_DISTANCE:
                e.pos[0] += to_player[0] * speed + wobble_x
                e.pos[1] += to_player[1] * speed
                e.pos[2] += to_player[2] * speed * 0.5 + wobble_alt
            else:
                # Circle around the player instead of ramming it
                e.pos[0] += wobble_x * 2
                e.pos[2] += wobble_alt * 2

        # === FACE THE PLAYER ===
        e.yaw = math.atan2(player.pos[0] - e.pos[0], player.pos[1] - e.pos[1])
        e.tilt = math.atan2(player.pos[2] - e.pos[2], dist) * 0.3

        # === SHOOTING ===
        e.shoot_timer -= self.cfg.TICK_DT
        if e.shoot_timer <= 0 and dist < self.cfg.FIRING_RANGE:
            self.projectiles.enemy_shoot(core, e)
            e.shoot_timer = e.stats.shoot_interval

    def _hide(self, core, e):
        """Drift toward the far side of the hide target, away from the player."""
        b = e.hide_target
        player = core.player
        away = normalize(np.array([player.pos[0] - b.x, player.pos[1] - b.y]))

        hide_x = b.x - away[0] * self.cfg.HIDE_OFFSET
        hide_y = b.y - away[1] * self.cfg.HIDE_OFFSET
        hide_alt = min(b.height * 0.7, self.cfg.HIDE_MAX_ALT)

        e.pos[0] += (hide_x - e.pos[0]) * self.cfg.HIDE_LERP
        e.pos[1] += (hide_y - e.pos[1]) * self.cfg.HIDE_LERP
        e.pos[2] += (hide_alt - e.pos[2]) * self.cfg.HIDE_LERP

    def _evade(self, core, e, to_player, speed):
        """Get out of the rear-view line of fire. Aggressiveness grows with the wave."""
        m = min(core.state.wave / 5.0, 1.0)
        evade_speed = speed * (1 + m * 2)   # 1x to 3x
        tier = evasion_tier(core.state.wave)

        if tier == 0:
            # Drift sideways a bit
            dodge = 1 if math.sin(e.fly_angle * 5) > 0 else -1
            e.pos[0] += -to_player[1] * dodge * evade_speed * 0.3
            e.pos[1] += to_player[0] * dodge * evade_speed * 0.3
        elif tier == 1:
            # Dodge and change altitude
            dodge = 1 if math.sin(e.fly_angle * 8) > 0 else -1
            e.pos[0] += -to_player[1] * dodge * evade_speed * 0.6
            e.pos[1] += to_player[0] * dodge * evade_speed * 0.6
            e.pos[2] += math.sin(e.fly_angle * 6) * 1.5
        else:
            dodge = 1 if math.sin(e.fly_angle * 10) > 0 else -1
            perp_x = -to_player[1] * dodge
            perp_y = to_player[0] * dodge
            e.pos[0] += perp_x * evade_speed + to_player[0] * evade_speed * 0.3
            e.pos[1] += perp_y * evade_speed + to_player[1] * evade_speed * 0.3
            e.pos[2] += math.sin(e.fly_angle * 8) * 3

            # Slide out to the player's side
            escape = core.player.yaw + dodge * math.pi / 2
            e.pos[0] += math.sin(escape) * evade_speed * 0.5
            e.pos[1] += math.cos(escape) * evade_speed * 0.5
