# parse/schema.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

FILE_FORMAT_VERSION = 2


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


@dataclass(frozen=True)
class WordCounts:
    total: Optional[int]
    learning: Optional[int]
    you_know: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "learning": self.learning, "youKnow": self.you_know}


@dataclass(frozen=True)
class LearnSnapshot:
    time: str                                   # ISO8601 with offset
    direct_words: Optional[WordCounts] = None
    indirect_words: Optional[WordCounts] = None
    blacklisted: Optional[int] = 0
    due_vocabulary_cards: Optional[int] = 0
    new_vocabulary_cards: Optional[int] = 0
    decks: int = 0                              # visible decks + "N more decks..."
    version: int = FILE_FORMAT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"time": self.time, "version": self.version}
        if self.direct_words is not None:
            d["directWords"] = self.direct_words.to_dict()
        if self.indirect_words is not None:
            d["indirectWords"] = self.indirect_words.to_dict()
        d["blacklisted"] = self.blacklisted
        d["dueVocabularyCards"] = self.due_vocabulary_cards
        d["newVocabularyCards"] = self.new_vocabulary_cards
        d["decks"] = self.decks
        return d


@dataclass(frozen=True)
class DayRecord:
    time: str
    new_cards: Optional[int] = None
    old_cards_failed: Optional[int] = None
    old_cards_passed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        # Counts whose series is missing from the chart are left out.
        return _drop_none({
            "time": self.time,
            "newCards": self.new_cards,
            "oldCardsFailed": self.old_cards_failed,
            "oldCardsPassed": self.old_cards_passed,
        })


@dataclass(frozen=True)
class LevelCount:
    level: Optional[int]
    cards: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "cards": self.cards}


@dataclass(frozen=True)
class StatsSnapshot:
    time: str
    current_streak: Optional[int] = None
    leaderboard: Optional[int] = None          # position on the leaderboard
    cards_per_day: Tuple[DayRecord, ...] = ()
    cards_by_level: Tuple[LevelCount, ...] = ()
    retention_rate: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "currentStreak": self.current_streak,
            "leaderboard": self.leaderboard,
            "cardsPerDay": [day.to_dict() for day in self.cards_per_day],
            "cardsByLevel": [level.to_dict() for level in self.cards_by_level],
            "retentionRate": dict(self.retention_rate),
        }


@dataclass(frozen=True)
class RankingEntry:
    rank: Optional[int]
    nickname: str
    is_current_user: bool
    cards: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "nickname": self.nickname,
            "isCurrentUser": self.is_current_user,
            "cards": self.cards,
        }


@dataclass(frozen=True)
class LeaderboardSnapshot:
    new_cards_ranking: Tuple[RankingEntry, ...] = ()
    old_cards_retained_ranking: Tuple[RankingEntry, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "newCardsRanking": [e.to_dict() for e in self.new_cards_ranking],
            "oldCardsRetainedRanking": [e.to_dict() for e in self.old_cards_retained_ranking],
        }


def merge_snapshots(*snapshots: Any) -> Dict[str, Any]:
    """Shallow field-wise union of snapshot dicts.

    Accepts snapshot objects or plain dicts.  Later snapshots win on a
    shared key; the only key the pages share is ``time``, which carries
    the same capture timestamp in every snapshot.
    """
    merged: Dict[str, Any] = {}
    for snapshot in snapshots:
        data = snapshot if isinstance(snapshot, dict) else snapshot.to_dict()
        merged.update(data)
    return merged
