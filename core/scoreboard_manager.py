"""
Scoreboard Manager：計分表的唯一狀態擁有者

職責：
1. 管理玩家名單（3-6 人）與 6 個座位的名稱名單
2. 管理回合數（新增 / 刪除最後一回合 / 重置）
3. 所有分數操作（top 輸入、填滿 157、Match、bottom 加減）
4. 提供衍生查詢（可編輯回合、回合合法性、總分）
5. 狀態變更後排程 auto-save

原則：
- 所有變更都經過這裡，每個操作結束時 scores 長度 == rounds
- 可編輯性與合法性每次讀取時重新計算，不做快取
- 索引超出範圍一律當作 no-op，不拋異常（選取格可能因人數減少而失效）
"""
import logging
import threading
from dataclasses import dataclass
from functools import wraps
from typing import List, Optional, Set

from core.autosave import AutoSaver
from core.exceptions import InvalidScoreValue
from core.game_constants import MATCH_VALUE, TOTAL_POINTS_PER_ROUND
from core.score_model import Player, RoundScore
from database import get_settings
from models import RoundPhase
from schemas import GameStateRecord, PlayerRecord, RoundScoreRecord
from services.naming_service import apply_default_names, default_player_name, truncate_name
from services.round_phase_service import get_round_phase
from services.round_phase_service import is_round_editable as round_is_editable
from services.score_validator import validate_player_count, validate_top_score
from services.scoring_service import (
    calculate_player_totals,
    calculate_round_top_sum,
    find_leading_indices,
    find_trailing_indices,
    is_round_valid as round_is_valid,
)

logger = logging.getLogger(__name__)


def synchronized(method):
    """
    在 ScoreboardManager 的鎖內執行方法

    auto-save 在計時器執行緒擷取快照，所有變更與快照都要取得同一把鎖，
    快照才不會看到一半的狀態（例如 rounds 已加一但 scores 還沒補齊）

    注意：
        - 使用 RLock，方法內呼叫其他 synchronized 方法不會 deadlock
    """
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


@dataclass(frozen=True)
class SelectedCell:
    round: int
    player_index: int


class ScoreboardManager:
    """計分表狀態機"""

    def __init__(self, data_store, settings=None, timer_factory=threading.Timer):
        """
        建立計分表並載入存檔

        流程：
        1. 載入名稱名單
        2. 嘗試載入遊戲狀態
        3. 有存檔 → 還原玩家、回合數、人數；沒有 → 建立新遊戲

        參數：
            data_store: Persistence Gateway（例如 SqlGameDataStore）
            settings: Settings，預設為 get_settings()
            timer_factory: auto-save 使用的計時器（測試可替換），預設 threading.Timer
        """
        self._data_store = data_store
        self._settings = settings or get_settings()
        self._players: List[Player] = []
        self._rounds = 0
        self._all_player_names: List[str] = []
        self.selected_cell: Optional[SelectedCell] = None
        self._lock = threading.RLock()
        self._autosaver = AutoSaver(
            self.save,
            delay_seconds=self._settings.autosave_debounce_ms / 1000,
            timer_factory=timer_factory
        )

        self._setup_initial_state()

    # ============ 狀態讀取 ============

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def rounds(self) -> int:
        return self._rounds

    @property
    def all_player_names(self) -> List[str]:
        return list(self._all_player_names)

    @property
    def active_player_count(self) -> int:
        return len(self._players)

    # ============ 初始化與持久化 ============

    def _setup_initial_state(self) -> None:
        self._all_player_names = self._data_store.load_player_names()

        saved_state = self._data_store.load_game_state()
        if saved_state is not None:
            self._load_game_state(saved_state)
        else:
            self._initialize_new_game(self._settings.default_player_count)

    def _load_game_state(self, state: GameStateRecord) -> None:
        self._players = [
            Player(
                id=record.id,
                name=record.name,
                scores=[RoundScore(top=s.top, bottom=s.bottom) for s in record.scores]
            )
            for record in state.players
        ]
        self._rounds = state.rounds
        self._apply_player_count(state.active_player_count)
        self._ensure_score_capacity()

        logger.info(
            f"Restored game: {self._rounds} rounds, {len(self._players)} players "
            f"(saved {state.last_modified.isoformat()})"
        )

    def _initialize_new_game(self, player_count: int) -> None:
        count = validate_player_count(player_count)
        self._players = [Player(name=self._all_player_names[i]) for i in range(count)]
        self._rounds = 0
        self._ensure_score_capacity()

        logger.info(f"Started new game with {count} players")

    @synchronized
    def snapshot(self) -> GameStateRecord:
        return GameStateRecord(
            players=[
                PlayerRecord(
                    id=player.id,
                    name=player.name,
                    scores=[RoundScoreRecord(top=s.top, bottom=s.bottom) for s in player.scores]
                )
                for player in self._players
            ],
            rounds=self._rounds,
            active_player_count=len(self._players)
        )

    def save(self) -> None:
        """立即寫入遊戲狀態與名稱名單（auto-save 的 callback）"""
        with self._lock:
            state = self.snapshot()
            names = list(self._all_player_names)
        self._data_store.save_game_state(state)
        self._data_store.save_player_names(names)

    def flush(self) -> None:
        """取消等待中的 auto-save 並立即寫入"""
        self._autosaver.flush()

    def _state_changed(self) -> None:
        self._autosaver.schedule()

    def _ensure_score_capacity(self) -> None:
        for player in self._players:
            player.ensure_score_capacity(self._rounds)

    # ============ 玩家與回合 ============

    def _apply_player_count(self, count: int) -> None:
        valid_count = validate_player_count(count)

        if valid_count > len(self._players):
            for index in range(len(self._players), valid_count):
                player = Player(name=self._name_for_seat(index))
                player.ensure_score_capacity(self._rounds)
                self._players.append(player)
        elif valid_count < len(self._players):
            del self._players[valid_count:]

        self.selected_cell = None

    @synchronized
    def set_player_count(self, count: int) -> None:
        """
        設定玩家人數（夾在 3-6）

        - 增加：新玩家的名稱取自名稱名單同一座位，並補齊目前回合數的空白分數
        - 減少：截掉後面的玩家（名稱仍留在名單中，之後增加人數會再出現）
        - 不論增減都會清除選取格
        """
        self._apply_player_count(count)
        logger.info(f"Player count set to {len(self._players)}")
        self._state_changed()

    @synchronized
    def add_round(self) -> None:
        self._rounds += 1
        self._ensure_score_capacity()
        logger.info(f"Added round {self._rounds}")
        self._state_changed()

    @synchronized
    def remove_last_round(self) -> None:
        if self._rounds == 0:
            return
        self._rounds -= 1
        self._ensure_score_capacity()
        logger.info(f"Removed last round, {self._rounds} rounds left")
        self._state_changed()

    @synchronized
    def reset_game(self) -> None:
        """
        重置遊戲

        回合數歸零、清空所有分數與選取格，並刪除遊戲存檔。
        名稱名單不受影響。

        注意：
            - 先取消等待中的 auto-save，避免重置前的快照在刪除之後才寫入
            - 之後重新排程，存下重置後的狀態（保留人數）
        """
        self._rounds = 0
        for player in self._players:
            player.scores = []
        self.selected_cell = None

        self._autosaver.cancel()
        self._data_store.clear_game_data()
        logger.info("Game reset")
        self._state_changed()

    def _name_for_seat(self, index: int) -> str:
        if index < len(self._all_player_names):
            return self._all_player_names[index]
        return default_player_name(index)

    @synchronized
    def update_player_name(self, name: str, index: int) -> None:
        """
        更新座位名稱（編輯中，每次輸入都會呼叫）

        - 最多 10 個字元
        - 名單不夠長時用「Spieler N」補齊
        - 允許空字串，預設名稱在 finalize_player_names() 才套用
        - 座位在目前玩家名單內時，同步更新玩家名稱
        """
        if index < 0:
            logger.warning(f"Ignoring name update for invalid seat {index}")
            return

        final_name = truncate_name(name)

        while len(self._all_player_names) <= index:
            self._all_player_names.append(default_player_name(len(self._all_player_names)))

        self._all_player_names[index] = final_name

        if index < len(self._players):
            self._players[index].name = final_name

        self._state_changed()

    @synchronized
    def finalize_player_names(self) -> None:
        """名稱編輯完成：空白名稱換成預設名稱"""
        finalized = apply_default_names(self._all_player_names)
        for index, name in enumerate(finalized):
            if name != self._all_player_names[index]:
                self.update_player_name(name, index)

    # ============ 分數操作 ============

    def _score_at(self, round_index: int, player_index: int) -> Optional[RoundScore]:
        if not 0 <= player_index < len(self._players):
            return None
        return self._players[player_index].score_for(round_index)

    def _update_score(self, round_index: int, player_index: int, update) -> bool:
        """
        以 update(score) 的結果取代某一格

        返回：
            False 如果索引超出範圍（no-op）
        """
        score = self._score_at(round_index, player_index)
        if score is None:
            return False
        self._players[player_index].set_score(update(score), round_index)
        self._state_changed()
        return True

    def _update_selected_score(self, update) -> bool:
        if self.selected_cell is None:
            return False
        return self._update_score(self.selected_cell.round, self.selected_cell.player_index, update)

    @synchronized
    def update_top_score(self, raw: str, round_index: int, player_index: int) -> None:
        """
        輸入 top 分數

        - 驗證失敗：記錄 warning，保留原值（不打斷輸入）
        - 索引超出範圍：no-op
        """
        try:
            value = validate_top_score(raw)
        except InvalidScoreValue as e:
            logger.warning(f"Score validation error: {e}")
            return

        self._update_score(round_index, player_index, lambda score: score.with_top(value))

    @synchronized
    def select_cell(self, round_index: int, player_index: int) -> None:
        self.selected_cell = SelectedCell(round=round_index, player_index=player_index)

    @synchronized
    def clear_selection(self) -> None:
        self.selected_cell = None

    @synchronized
    def adjust_bottom_score(self, delta: int) -> None:
        self._update_selected_score(lambda score: score.with_bottom((score.bottom or 0) + delta))

    @synchronized
    def clear_bottom_score(self) -> None:
        self._update_selected_score(lambda score: score.with_bottom(None))

    @synchronized
    def fill_top_score_to_total(self) -> None:
        """
        選取格的 top 填成「157 減去其他玩家 top 總和」（最少 0）

        只看其他玩家，不看自己原本的值，所以重複呼叫結果相同
        """
        selected = self.selected_cell
        if selected is None:
            return

        others = [p for index, p in enumerate(self._players) if index != selected.player_index]
        remainder = max(0, TOTAL_POINTS_PER_ROUND - calculate_round_top_sum(others, selected.round))
        self._update_selected_score(lambda score: score.with_top(remainder))

    @synchronized
    def set_top_score_to_match(self) -> None:
        """選取格的 top 設為 Match 保留值（-257，不經過範圍限制）"""
        self._update_selected_score(lambda score: score.with_top(MATCH_VALUE))

    # ============ 衍生查詢 ============

    def is_round_editable(self, round_index: int) -> bool:
        return round_is_editable(round_index, self._rounds)

    def round_phase(self, round_index: int) -> RoundPhase:
        return get_round_phase(round_index, self._rounds)

    def is_round_valid(self, round_index: int) -> bool:
        return round_is_valid(self._players, round_index, self._rounds)

    @property
    def player_totals(self) -> List[int]:
        return calculate_player_totals(self._players)

    @property
    def leading_player_indices(self) -> Set[int]:
        return find_leading_indices(self.player_totals)

    @property
    def trailing_player_indices(self) -> Set[int]:
        return find_trailing_indices(self.player_totals)

    def top_score_text(self, round_index: int, player_index: int) -> str:
        """顯示用的 top 分數；未輸入或超出範圍時為 "0" """
        score = self._score_at(round_index, player_index)
        if score is None or score.top is None:
            return "0"
        return str(score.top)

    def bottom_score(self, round_index: int, player_index: int) -> Optional[int]:
        score = self._score_at(round_index, player_index)
        return score.bottom if score is not None else None
