class Config:
    # --- Simulation ---
    # One tick per rendered frame (~60 FPS). Timers that the game expresses in
    # seconds (shoot timers, hide timers) are decremented by TICK_DT per tick.
    TICK_DT = 0.016
    MAX_TICKS = 60 * 60 * 10      # 10 minutes of play at 60 FPS

    # --- World ---
    GROUND_LEVEL = 0.0
    WORLD_BOUNDARY = 400.0        # Horizontal wrap limit on both axes (toroidal)
    ALTITUDE_CEILING = 400.0

    # City layout (default geometry provider)
    CITY_SIZE = 700.0
    CITY_BLOCK_SIZE = 60.0
    CITY_STREET_WIDTH = 20.0

    # --- Flight ---
    PLAYER_START = (0.0, 300.0, 150.0)   # (x, y, alt)
    THROTTLE_START = 0.25
    MIN_THROTTLE = 0.1
    MAX_THROTTLE = 1.0
    THROTTLE_STEP = 0.02
    MIN_SPEED = 0.3               # Units per tick at throttle 0
    MAX_SPEED = 2.0               # Units per tick at throttle 1
    PITCH_RATE = 0.03             # rad/tick at full stick
    YAW_RATE = 0.02
    ROLL_RATE = 0.04
    MAX_ROLL = 0.5                # Cosmetic lean only
    ROLL_DECAY = 0.9
    MAX_PITCH_DEG = 60.0
    CEILING_PITCH_DAMPING = 0.9

    # Crash geometry
    CRASH_ALTITUDE = 5.0          # Above GROUND_LEVEL
    CRASH_FOOTPRINT_MARGIN = 3.0
    CRASH_HEIGHT_MARGIN = 5.0

    # --- Projectiles ---
    PLAYER_BULLET_SPEED = 4.0
    PLAYER_BULLET_LIFE = 150      # ticks
    ENEMY_BULLET_SPEED = 1.2
    ENEMY_BULLET_LIFE = 200
    SHOOT_COOLDOWN_TICKS = 6
    AUTO_AIM_HOLD_TICKS = 3       # Indicator stays on while cooldown > this
    BULLET_MIN_ALT = -100.0
    BULLET_MAX_ALT = 400.0
    PLAYER_HIT_RADIUS = 3.0
    ENEMY_BULLET_DAMAGE = 10

    # --- Targeting (auto-aim) ---
    AUTO_AIM_RANGE = 200.0
    AUTO_AIM_MIN_ALIGNMENT = 0.5  # cos(60 deg)
    AUTO_AIM_ALIGNMENT_WEIGHT = 100.0
    AUTO_AIM_DISTANCE_WEIGHT = 0.3

    # --- Enemies ---
    ACTIVATION_DISTANCE = 100.0
    CLOSE_DISTANCE = 30.0         # Circle instead of closing further
    FIRING_RANGE = 150.0
    FLY_ANGLE_STEP = 0.02
    DORMANT_BOB_AMPLITUDE = 2.0

    # Hiding behind buildings (non-boss only)
    HIDE_PROBABILITY = 0.002      # Per tick
    HIDE_SEARCH_RADIUS = 100.0
    HIDE_DURATION = (2.0, 5.0)    # seconds
    HIDE_COOLDOWN = (5.0, 10.0)
    HIDE_OFFSET = 25.0            # Distance past the building, away from player
    HIDE_MAX_ALT = 80.0
    HIDE_LERP = 0.03

    # Evasion when the player watches its six
    EVADE_RANGE = 100.0
    EVADE_BEHIND_DOT = -0.3

    # --- Recovery items ---
    DROP_CHANCE = 0.2
    BOSS_DROP_CHANCE = 0.5
    PICKUP_RADIUS = 10.0
    HEAL_AMOUNT = 25
    ITEM_MIN_ALT = 30.0
    MAX_LIVES = 100

    # --- Waves ---
    BASE_WAVE_SIZE = 5
    WAVE_SIZE_PER_WAVE = 2
    SPAWN_INTERVAL_TICKS = 31     # ~500 ms between staggered spawns
    SPAWN_DISTANCE = (150.0, 250.0)
    SPAWN_ALTITUDE = (20.0, 120.0)
    FORMATION_LOAD_TICKS = 1      # Ticks until the formation glyph set is ready

    # Archetype roll thresholds: (min wave, probability)
    BOSS_GATE = (5, 0.08)
    TANK_GATE = (3, 0.2)
    HUNTER_GATE = (2, 0.45)

    # --- Environment (Gymnasium wrapper) ---
    ENV_K_ENEMIES = 8
    PLAYER_FEAT_DIM = 10
    ENEMY_FEAT_DIM = 6
    OBS_DIM = PLAYER_FEAT_DIM + ENV_K_ENEMIES * ENEMY_FEAT_DIM
    ACTION_DIM = 5                # [pitch, turn, throttle, fire, rear_view]
    GAME_OVER_PENALTY = 50.0

    # --- Logging ---
    LOG_DIR = "logs"
