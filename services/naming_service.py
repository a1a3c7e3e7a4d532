"""
命名服務：玩家預設名稱與名稱名單整理

純計算邏輯，不涉及狀態轉換
"""
from typing import List, Sequence

from core.game_constants import MAX_NAME_LENGTH, MAX_PLAYERS
from services.score_validator import validate_player_name


def default_player_name(index: int) -> str:
    """
    依座位索引產生預設名稱

    格式：「Spieler N」（N 從 1 開始）

    範例：
        default_player_name(0) -> "Spieler 1"
        default_player_name(7) -> "Spieler 8"
    """
    return f"Spieler {index + 1}"


def default_player_names(count: int = MAX_PLAYERS) -> List[str]:
    return [default_player_name(i) for i in range(count)]


def truncate_name(name: str) -> str:
    """名稱最多保留 10 個字元（編輯中允許空字串與空白）"""
    return name[:MAX_NAME_LENGTH]


def normalize_roster(names: Sequence[str]) -> List[str]:
    """
    整理名稱名單，確保剛好 6 個

    邏輯：
    - 不足 6 個：用預設名稱補到 6 個
    - 超過 6 個：只保留前 6 個

    參數：
        names: 儲存中的名稱（可能不完整）

    返回：
        長度為 6 的名稱列表
    """
    roster = list(names[:MAX_PLAYERS])
    roster.extend(default_player_names(MAX_PLAYERS)[len(roster):])
    return roster


def apply_default_names(names: Sequence[str]) -> List[str]:
    """
    把空白名稱換成預設名稱（名稱編輯完成時使用）

    只處理前 6 個座位；其餘名稱原樣保留

    範例：
        apply_default_names(["Anna", "  ", "Beat"]) -> ["Anna", "Spieler 2", "Beat"]
    """
    result = list(names)
    for index in range(min(len(result), MAX_PLAYERS)):
        if not validate_player_name(result[index]):
            result[index] = default_player_name(index)
    return result
