"""Tagged result of a finished round."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    time_ms: int

    def to_dict(self) -> dict:
        return {'kind': 'success', 'time_ms': self.time_ms}


@dataclass(frozen=True)
class FalseStart:

    def to_dict(self) -> dict:
        return {'kind': 'false_start'}


Outcome = Union[Success, FalseStart]
