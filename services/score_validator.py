"""
分數驗證服務：把使用者輸入轉成可以儲存的值

純計算邏輯，沒有副作用
"""
import re
from typing import Iterable, Optional

from core.exceptions import InvalidScoreValue
from core.game_constants import (
    MATCH_VALUE,
    MAX_PLAYERS,
    MAX_SCORE_VALUE,
    MIN_PLAYERS,
    MIN_SCORE_VALUE,
    TOTAL_POINTS_PER_ROUND,
)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def validate_top_score(raw: str) -> int:
    """
    解析 top 分數輸入

    規則：
    - 去掉前後空白
    - 空字串視為 0
    - 不是整數 → InvalidScoreValue
    - 超出 [-999, 999] 的值會被夾到邊界

    參數：
        raw: 使用者輸入的字串

    返回：
        夾在範圍內的整數

    異常：
        InvalidScoreValue: 輸入不是整數

    範例：
        validate_top_score("007") -> 7
        validate_top_score("1500") -> 999
        validate_top_score("-2000") -> -999
        validate_top_score("") -> 0
    """
    trimmed = raw.strip()
    if not trimmed:
        return 0

    if not _INTEGER_PATTERN.fullmatch(trimmed):
        raise InvalidScoreValue(raw)

    return max(MIN_SCORE_VALUE, min(MAX_SCORE_VALUE, int(trimmed)))


def validate_player_name(raw: str) -> str:
    """去掉前後空白；全空白回傳空字串，預設名稱由呼叫者決定"""
    return raw.strip()


def validate_player_count(count: int) -> int:
    return max(MIN_PLAYERS, min(MAX_PLAYERS, count))


def is_valid_round_sum(top_values: Iterable[Optional[int]], allow_match: bool = True) -> bool:
    """
    檢查一個回合的 top 分數總和

    - allow_match 且任一值等於 Match 保留值 → 直接視為合法
    - 否則忽略 None，總和必須剛好是 157

    參數：
        top_values: 每位玩家在該回合的 top 分數（None 表示未輸入）
        allow_match: 是否接受 Match

    返回：
        True 如果回合總和合法
    """
    values = list(top_values)
    if allow_match and MATCH_VALUE in values:
        return True

    return sum(value for value in values if value is not None) == TOTAL_POINTS_PER_ROUND
