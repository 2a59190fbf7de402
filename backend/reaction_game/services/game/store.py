from typing import Iterable, List

from flask import current_app

from reaction_game import db
from reaction_game.models import KeyValue
from reaction_game.services.game.ranking import (DEFAULT_RANKING_SIZE, RankingDecodeError, RankingEntry,
                                                 decode_rankings, encode_rankings)

DEFAULT_STORAGE_KEY = 'reactionGameRankings'


class RankingStore:
    """Leaderboard persisted as one KeyValue row. Needs an app context."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY, limit: int = DEFAULT_RANKING_SIZE):
        self.key = key
        self.limit = limit

    def load(self) -> List[RankingEntry]:
        raw = KeyValue.get_value(self.key)
        if raw is None:
            return []
        try:
            rankings = decode_rankings(raw, limit=self.limit)
        except RankingDecodeError as exc:
            current_app.logger.warning(f"[rankings-load] key={self.key} unreadable record, starting empty: {exc}")
            return []
        current_app.logger.info(f"[rankings-load] key={self.key} entries={len(rankings)}")
        return rankings

    def save(self, rankings: Iterable[RankingEntry]) -> None:
        try:
            KeyValue.set_value(self.key, encode_rankings(rankings))
        except Exception:
            db.session.rollback()
            raise

    def clear(self) -> None:
        try:
            removed = KeyValue.remove(self.key)
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info(f"[rankings-clear] key={self.key} removed={removed}")
