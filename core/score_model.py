"""
Score Model：RoundScore 與 Player

RoundScore 是一位玩家在一個回合的兩個分數（top / bottom），
Player 持有與全域回合數對齊的 RoundScore 列表。
"""
import uuid
from dataclasses import dataclass, field, replace
from typing import List, Optional

from core.game_constants import MATCH_VALUE


@dataclass
class RoundScore:
    top: Optional[int] = None
    bottom: Optional[int] = None

    @property
    def total(self) -> int:
        return (self.top or 0) + (self.bottom or 0)

    @property
    def is_empty(self) -> bool:
        return self.top is None and self.bottom is None

    @property
    def has_top_value(self) -> bool:
        return self.top is not None

    @property
    def has_bottom_value(self) -> bool:
        return self.bottom is not None

    @property
    def is_match(self) -> bool:
        return self.top == MATCH_VALUE

    def with_top(self, top: Optional[int]) -> "RoundScore":
        return replace(self, top=top)

    def with_bottom(self, bottom: Optional[int]) -> "RoundScore":
        return replace(self, bottom=bottom)


@dataclass
class Player:
    name: str
    scores: List[RoundScore] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def total_score(self) -> int:
        return sum(score.total for score in self.scores)

    def score_for(self, round_index: int) -> Optional[RoundScore]:
        if 0 <= round_index < len(self.scores):
            return self.scores[round_index]
        return None

    def set_score(self, score: RoundScore, round_index: int) -> None:
        if 0 <= round_index < len(self.scores):
            self.scores[round_index] = score

    def ensure_score_capacity(self, rounds: int) -> None:
        """
        讓 scores 長度等於 rounds

        - 不足：補上空白 RoundScore
        - 過多：只保留前 rounds 筆

        重複呼叫同樣的 rounds 不會有任何變化
        """
        if len(self.scores) < rounds:
            self.scores.extend(RoundScore() for _ in range(rounds - len(self.scores)))
        elif len(self.scores) > rounds:
            del self.scores[rounds:]


def total(score: RoundScore) -> int:
    return score.total


def is_empty(score: RoundScore) -> bool:
    return score.is_empty


def ensure_capacity(player: Player, rounds: int) -> None:
    player.ensure_score_capacity(rounds)
