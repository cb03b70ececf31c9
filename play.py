import argparse
import numpy as np
from tqdm import tqdm
from config import Config
from skyfighter.bot import Autopilot
from skyfighter.core import SkyFighterCore
from skyfighter.utils.logger import FlightRecorder
from skyfighter.world import World


def run_episode(episode, seed, max_ticks, recorder=None, pilot=None):
    """
    Fly one autopilot session headless.

    Returns:
        dict: Episode summary
    """
    rng = np.random.default_rng(seed)
    core = SkyFighterCore(world=World.city(rng), rng=rng)
    pilot = pilot or Autopilot()

    kills = 0
    shots = 0
    for _ in tqdm(range(max_ticks), desc=f"Episode {episode}", leave=False):
        snap = core.step(pilot.get_input(core))
        if recorder is not None:
            recorder.log_step(episode, core)

        for ev in snap.events:
            if ev["type"] == "kill":
                kills += 1
            elif ev["type"] == "shot":
                shots += 1

        if snap.terminal:
            break

    path = recorder.save_episode(episode) if recorder is not None else None
    return {
        "episode": episode,
        "ticks": core.tick,
        "score": core.state.score,
        "wave": core.state.wave,
        "lives": core.state.lives,
        "kills": kills,
        "shots": shots,
        "cause": core.state.cause.value if core.state.cause else "timeout",
        "record": path,
    }


def main():
    parser = argparse.ArgumentParser(description="Run headless autopilot sessions")
    parser.add_argument("--episodes", type=int, default=1, help="Number of sessions to fly")
    parser.add_argument("--max-ticks", type=int, default=Config.MAX_TICKS, help="Tick limit per session")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (episode i uses seed + i)")
    parser.add_argument("--no-record", action="store_true", help="Skip writing flight records")
    args = parser.parse_args()

    recorder = None if args.no_record else FlightRecorder(Config.LOG_DIR)

    print(f"Running {args.episodes} episode(s), max {args.max_ticks} ticks each...")
    try:
        for ep in range(args.episodes):
            seed = None if args.seed is None else args.seed + ep
            s = run_episode(ep, seed, args.max_ticks, recorder)
            print(f"Episode {ep}: score={s['score']} wave={s['wave']} lives={s['lives']} "
                  f"kills={s['kills']} shots={s['shots']} ticks={s['ticks']} end={s['cause']}")
            if s["record"]:
                print(f"  Flight record: {s['record']}")
    except KeyboardInterrupt:
        print("Stopping...")


if __name__ == "__main__":
    main()
