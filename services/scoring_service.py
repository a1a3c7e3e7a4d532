"""
計分服務：回合總和、回合合法性、玩家總分與排名標記

純計算邏輯，不修改任何 Player
"""
from typing import List, Optional, Sequence, Set

from core.score_model import Player
from services.round_phase_service import should_validate_round
from services.score_validator import is_valid_round_sum


def get_round_top_values(players: Sequence[Player], round_index: int) -> List[Optional[int]]:
    """
    取得所有玩家在某回合的 top 分數

    沒有該回合資料的玩家不列入（容量不一致時不會出錯）
    """
    values = []
    for player in players:
        score = player.score_for(round_index)
        if score is not None:
            values.append(score.top)
    return values


def calculate_round_top_sum(players: Sequence[Player], round_index: int) -> int:
    return sum(value or 0 for value in get_round_top_values(players, round_index))


def is_round_valid(players: Sequence[Player], round_index: int, rounds: int) -> bool:
    """
    檢查回合是否合法

    規則：
    - 可編輯回合及之後的索引還沒結束 → 視為合法（不判斷）
    - 有人 Match → 合法
    - 否則 top 總和必須等於 157

    參數：
        players: 目前所有玩家
        round_index: 要檢查的回合
        rounds: 目前總回合數

    返回：
        True 如果回合合法或尚未判斷
    """
    if not should_validate_round(round_index, rounds):
        return True

    return is_valid_round_sum(get_round_top_values(players, round_index), allow_match=True)


def calculate_total_score(player: Player) -> int:
    """
    計算一個玩家在整場遊戲的總分

    範例：
        Round 1: top 50, bottom 20 → 70
        Round 2: top 7 → 7
        Total: 77
    """
    return player.total_score


def calculate_player_totals(players: Sequence[Player]) -> List[int]:
    return [calculate_total_score(player) for player in players]


def find_leading_indices(totals: Sequence[int]) -> Set[int]:
    """
    找出領先的玩家（總分最低者）

    所有總分都是 0（或沒有玩家）時不標記任何人
    """
    if not totals or all(value == 0 for value in totals):
        return set()
    lowest = min(totals)
    return {index for index, value in enumerate(totals) if value == lowest}


def find_trailing_indices(totals: Sequence[int]) -> Set[int]:
    """找出落後的玩家（總分最高者），規則同 find_leading_indices"""
    if not totals or all(value == 0 for value in totals):
        return set()
    highest = max(totals)
    return {index for index, value in enumerate(totals) if value == highest}
