"""Result labels shown next to a reaction time.

Kept in one place so the strings can be swapped for another locale
without touching the game logic.
"""

from typing import Optional

from reaction_game.services.game.outcome import FalseStart, Outcome, Success

# Ascending thresholds: a faster time always gets an equal or better label
TIME_BANDS = (
    (200, 'Superhuman!'),
    (300, 'Very fast!'),
    (400, 'Fast!'),
    (500, 'Average'),
)
SLOWEST_LABEL = 'Keep practicing'

MSG_FALSE_START = 'False start! Wait for the signal.'


def time_band(time_ms: int) -> int:
    """Index of the first band whose threshold ``time_ms`` is under; len(TIME_BANDS) if none."""
    for idx, (limit, _label) in enumerate(TIME_BANDS):
        if time_ms < limit:
            return idx
    return len(TIME_BANDS)


def classify_time(time_ms: int) -> str:
    idx = time_band(time_ms)
    if idx < len(TIME_BANDS):
        return TIME_BANDS[idx][1]
    return SLOWEST_LABEL


def result_message(outcome: Optional[Outcome]) -> str:
    if isinstance(outcome, Success):
        return classify_time(outcome.time_ms)
    if isinstance(outcome, FalseStart):
        return MSG_FALSE_START
    return ''
