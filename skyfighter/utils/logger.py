import os
import csv
import time


class FlightRecorder:
    """
    Logs one row per simulation tick for post-analysis (see dashboard.py).
    """
    def __init__(self, log_dir="logs"):
        self.log_dir = log_dir
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        self.current_episode_data = []
        self.headers = [
            "episode", "tick", "time",
            "player_x", "player_y", "player_alt", "yaw", "pitch", "roll", "throttle",
            "rear_view", "score", "lives", "wave", "pending",
            "enemies", "bullets", "items", "auto_aim", "cause"
        ]

    def log_step(self, episode, core):
        """
        Buffer a single tick of data.
        """
        p = core.player
        s = core.state
        row = [
            episode, core.tick, round(core.time, 4),
            p.pos[0], p.pos[1], p.pos[2], p.yaw, p.pitch, p.roll, p.throttle,
            int(p.rear_view), s.score, s.lives, s.wave, s.pending,
            len(core.enemies), len(core.bullets), len(core.items),
            int(p.auto_aim_active), s.cause.value if s.cause else ""
        ]
        self.current_episode_data.append(row)

    def save_episode(self, episode_id):
        """
        Write buffered data to CSV.

        Returns:
            str or None: Path of the written file
        """
        if not self.current_episode_data:
            return None

        filename = os.path.join(self.log_dir, f"flight_record_ep{episode_id}_{int(time.time())}.csv")

        try:
            with open(filename, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(self.headers)
                writer.writerows(self.current_episode_data)
        except Exception as e:
            print(f"Failed to save flight record: {e}")
            filename = None

        self.current_episode_data = []
        return filename
