import numpy as np
from config import Config
from skyfighter.entities import Archetype, Bullet, RecoveryItem, Side
from skyfighter.targeting import select_target
from skyfighter.utils.math3d import dist_3d, forward_vector, normalize


class ProjectileSystem:
    """
    Spawns, advances and resolves bullets for both sides.

    Per-bullet resolution order (first match wins, the bullet is consumed):
        1. Building occlusion (no other effect)
        2. Player bullet vs. enemies (first enemy in iteration order)
        3. Enemy bullet vs. player
    """

    def __init__(self):
        self.cfg = Config

    # === SPAWNING ===

    def view_direction(self, player):
        """Direction the pilot is looking: forward, or backward in rear view."""
        fwd = forward_vector(player.yaw, player.pitch)
        return -fwd if player.rear_view else fwd

    def handle_player_fire(self, core, inp):
        """
        Tick the shot cooldown and fire if the trigger is held and the
        cooldown window has elapsed. The auto-aim target is re-selected
        for every shot.

        Returns:
            Bullet or None
        """
        player = core.player
        player.shoot_cooldown -= 1

        if inp.fire and player.shoot_cooldown <= 0:
            view = self.view_direction(player)
            target = select_target(player.pos, view, core.enemies, self.cfg)
            direction = normalize(target.pos - player.pos) if target is not None else view

            bullet = self.spawn(core, Side.PLAYER, player.pos, direction)
            player.shoot_cooldown = self.cfg.SHOOT_COOLDOWN_TICKS
            player.auto_aim_active = target is not None
            core.events.append({
                "type": "shot",
                "auto_aim": target is not None,
                "target": target.uid if target is not None else None,
            })
            return bullet

        # Indicator lingers for a few ticks after an aimed shot
        if player.shoot_cooldown <= self.cfg.AUTO_AIM_HOLD_TICKS:
            player.auto_aim_active = False
        return None

    def enemy_shoot(self, core, enemy):
        direction = normalize(core.player.pos - enemy.pos)
        return self.spawn(core, Side.ENEMY, enemy.pos, direction)

    def spawn(self, core, side, pos, direction):
        if side == Side.PLAYER:
            speed, life = self.cfg.PLAYER_BULLET_SPEED, self.cfg.PLAYER_BULLET_LIFE
        else:
            speed, life = self.cfg.ENEMY_BULLET_SPEED, self.cfg.ENEMY_BULLET_LIFE

        bullet = Bullet(side=Side(side), pos=np.array(pos, dtype=float),
                        vel=normalize(direction) * speed, life=life)
        core.bullets.append(bullet)
        return bullet

    # === PER-TICK UPDATE ===

    def update(self, core):
        survivors = []
        for i, b in enumerate(core.bullets):
            if self._advance(core, b):
                survivors.append(b)
            if core.state.terminal:
                # Frozen: bullets not yet processed stay where they are
                survivors.extend(core.bullets[i + 1:])
                break
        core.bullets = survivors

    def _advance(self, core, b):
        """Move one bullet and resolve it. Returns False if it is consumed."""
        b.pos = b.pos + b.vel
        b.life -= 1

        if b.life <= 0 or not (self.cfg.BULLET_MIN_ALT <= b.pos[2] <= self.cfg.BULLET_MAX_ALT):
            return False

        # Bullets don't pass through buildings
        if core.world.occludes(b.pos):
            return False

        if b.side == Side.PLAYER:
            return not self._resolve_player_bullet(core, b)
        return not self._resolve_enemy_bullet(core, b)

    def _resolve_player_bullet(self, core, b):
        for e in core.enemies:
            if dist_3d(b.pos, e.pos) < e.stats.hit_radius:
                e.health = max(0, e.health - 1)
                if e.health <= 0:
                    self._kill(core, e)
                else:
                    core.events.append({"type": "hit", "enemy": e.uid})
                return True
        return False

    def _resolve_enemy_bullet(self, core, b):
        if dist_3d(b.pos, core.player.pos) < self.cfg.PLAYER_HIT_RADIUS:
            core.state.damage(self.cfg.ENEMY_BULLET_DAMAGE)
            core.events.append({"type": "damage", "amount": self.cfg.ENEMY_BULLET_DAMAGE})
            return True
        return False

    def _kill(self, core, e):
        core.enemies.remove(e)
        core.state.add_score(e.stats.score)
        core.state.resolve_pending()
        core.events.append({"type": "kill", "enemy": e.uid, "archetype": e.archetype.value,
                            "score": e.stats.score})
        core.events.append({"type": "explosion", "pos": e.pos.copy(), "size": e.scale})

        drop_chance = self.cfg.BOSS_DROP_CHANCE if e.archetype == Archetype.BOSS else self.cfg.DROP_CHANCE
        if core.rng.random() < drop_chance:
            pos = e.pos.copy()
            pos[2] = max(pos[2], self.cfg.ITEM_MIN_ALT)
            core.items.append(RecoveryItem(
                pos=pos,
                rotation_speed=0.02 + core.rng.random() * 0.02,
                float_offset=core.rng.random() * np.pi * 2,
            ))
