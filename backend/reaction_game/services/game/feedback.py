"""Vibration patterns (navigator.vibrate style, alternating on/off ms).

Purely advisory: clients without a vibration motor ignore them.
"""

from typing import List

from reaction_game.services.game.messages import time_band

ROUND_START = [50]
CUE_SHOWN = [100]
FALSE_START = [200, 100, 200]

# One pattern per time band plus the slowest; faster reactions get more pulses
_SUCCESS_PATTERNS = [
    [50, 50, 50, 50, 50],
    [50, 50, 50],
    [50, 50, 100],
    [100],
    [150],
]


def success_pattern(time_ms: int) -> List[int]:
    return list(_SUCCESS_PATTERNS[time_band(time_ms)])
