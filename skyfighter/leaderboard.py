"""
    Prepares a finished game's result for the online leaderboard.
    Nothing here touches the network; the caller owns the transport.
"""

import re
from dataclasses import dataclass
from typing import Optional

MAX_NAME_LENGTH = 20
MAX_COMMENT_LENGTH = 100
DEFAULT_BOARD_SIZE = 10

# Same character set the leaderboard server keeps:
# ASCII letters/digits, hiragana, katakana, CJK U+4E00-U+9FAF, whitespace, '-' and '_'
_ALLOWED_NAME = re.compile(r"[A-Za-z0-9\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF\s\-_]")


def sanitize_name(name):
    """
    Truncate to MAX_NAME_LENGTH, then drop every character outside the allowed set.
    Raises ValueError when nothing is left.
    """
    kept = "".join(_ALLOWED_NAME.findall(str(name)[:MAX_NAME_LENGTH]))
    if not kept:
        raise ValueError("Player name is empty after sanitizing")
    return kept


@dataclass(frozen=True)
class ScoreSubmission:
    player_name: str
    score: int
    wave: int
    comment: str = ""
    group_id: Optional[str] = None

    def to_payload(self):
        """Request body for the score endpoint."""
        payload = {
            "player_name": self.player_name,
            "score": int(self.score),
            "wave": int(self.wave),
            "comment": self.comment,
        }
        if self.group_id:
            payload["group_id"] = self.group_id
        return payload


def build_submission(result, name, comment="", group_id=None):
    """
    Args:
        result: GameResult of a finished game
        name: Raw player name
        comment: Free text, truncated to MAX_COMMENT_LENGTH
        group_id: Optional private board identifier
    """
    if result is None:
        raise ValueError("Game is not over yet")
    return ScoreSubmission(
        player_name=sanitize_name(name),
        score=result.score,
        wave=result.wave,
        comment=(comment or "")[:MAX_COMMENT_LENGTH],
        group_id=group_id or None,
    )


def qualifies(score, top_scores, limit=DEFAULT_BOARD_SIZE):
    """True when the board has room or the score beats its limit-th best."""
    ranked = sorted(top_scores, reverse=True)
    if len(ranked) < limit:
        return True
    return score > ranked[limit - 1]
