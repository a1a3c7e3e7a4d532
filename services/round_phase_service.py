"""
回合階段服務：判斷回合是否可編輯、是否需要檢查總和

Vier Bure 計分表的回合設計：
- 最新的回合（rounds - 1）: EDITABLE（可以輸入分數）
- 其他回合: FROZEN（唯讀，並檢查 top 總和是否為 157）
"""
from models import RoundPhase


def get_round_phase(round_index: int, rounds: int) -> RoundPhase:
    """
    根據回合索引與目前回合數決定回合階段

    規則：
    - round_index == rounds - 1: EDITABLE
    - 其他: FROZEN

    參數：
        round_index: 回合索引（從 0 開始）
        rounds: 目前總回合數

    返回：
        RoundPhase enum

    範例：
        get_round_phase(2, 3) -> RoundPhase.EDITABLE
        get_round_phase(0, 3) -> RoundPhase.FROZEN
        get_round_phase(0, 0) -> RoundPhase.FROZEN
    """
    if is_round_editable(round_index, rounds):
        return RoundPhase.EDITABLE
    return RoundPhase.FROZEN


def is_round_editable(round_index: int, rounds: int) -> bool:
    """
    檢查是否為可編輯回合

    同一時間只有一個回合可以編輯；rounds == 0 時沒有任何回合可編輯

    參數：
        round_index: 回合索引
        rounds: 目前總回合數

    返回：
        True 如果 round_index 是最新回合
    """
    return 0 <= round_index == rounds - 1


def should_validate_round(round_index: int, rounds: int) -> bool:
    """
    檢查是否應該驗證此回合的總和

    用途：
        可編輯回合（以及之後的索引）還在輸入中，不判斷合法性

    返回：
        True 如果回合在可編輯回合之前
    """
    return round_index < rounds - 1
