"""Leaderboard entries, the top-N update rule and the persisted record codec.

The persisted record is a JSON object::

    {"version": 1, "entries": [{"timeMs": 187, "achievedAt": "2026-10-19T09:30:00+00:00"}]}

Older browser builds stored a bare array, either of ``{timeMs, achievedAt}``
or of ``{time, date}``; both are still accepted on read.
"""

import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List

RECORD_VERSION = 1
DEFAULT_RANKING_SIZE = 10


class RankingDecodeError(ValueError):
    """Raised when a persisted leaderboard record cannot be understood."""


@dataclass(frozen=True)
class RankingEntry:
    time_ms: int
    achieved_at: datetime

    def to_dict(self) -> dict:
        return {
            'time_ms': self.time_ms,
            'achieved_at': self.achieved_at.isoformat(),
        }


def update_rankings(rankings: Iterable[RankingEntry], entry: RankingEntry,
                    limit: int = DEFAULT_RANKING_SIZE) -> List[RankingEntry]:
    """Return a new leaderboard with ``entry`` inserted, sorted and cut to ``limit``."""
    merged = sorted([*rankings, entry], key=lambda e: e.time_ms)
    return merged[:limit]


def encode_rankings(rankings: Iterable[RankingEntry]) -> str:
    return json.dumps({
        'version': RECORD_VERSION,
        'entries': [
            {'timeMs': e.time_ms, 'achievedAt': e.achieved_at.isoformat()}
            for e in rankings
        ],
    })


def _parse_time_ms(value: Any) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RankingDecodeError(f"timeMs must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0 or value != int(value):
        raise RankingDecodeError(f"timeMs must be a non-negative integer, got {value!r}")
    return int(value)


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise RankingDecodeError(f"achievedAt must be a string, got {value!r}")
    try:
        # JavaScript's toISOString() ends with 'Z'
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError as exc:
        raise RankingDecodeError(f"achievedAt is not ISO-8601: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_entry(raw: Any) -> RankingEntry:
    if not isinstance(raw, dict):
        raise RankingDecodeError(f"entry must be an object, got {raw!r}")
    if 'timeMs' in raw:
        time_key, date_key = 'timeMs', 'achievedAt'
    elif 'time' in raw:
        time_key, date_key = 'time', 'date'
    else:
        raise RankingDecodeError(f"entry has no time field: {raw!r}")
    if date_key not in raw:
        raise RankingDecodeError(f"entry has no {date_key} field: {raw!r}")
    return RankingEntry(
        time_ms=_parse_time_ms(raw[time_key]),
        achieved_at=_parse_timestamp(raw[date_key]),
    )


def decode_rankings(raw: str, limit: int = DEFAULT_RANKING_SIZE) -> List[RankingEntry]:
    """Parse a persisted record.

    Raises RankingDecodeError on anything that is not a well-formed record.
    The result is re-sorted and truncated, so a hand-edited record still
    satisfies the leaderboard ordering.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise RankingDecodeError(f"record is not JSON: {exc}") from exc

    if isinstance(data, dict):
        version = data.get('version')
        if version != RECORD_VERSION:
            raise RankingDecodeError(f"unsupported record version {version!r}")
        entries = data.get('entries')
    else:
        entries = data
    if not isinstance(entries, list):
        raise RankingDecodeError(f"entries must be a list, got {type(entries).__name__}")

    parsed = [_parse_entry(item) for item in entries]
    return sorted(parsed, key=lambda e: e.time_ms)[:limit]
