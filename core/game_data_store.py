"""
Game Data Store：玩家名稱與遊戲狀態的持久化

職責：
1. 讀寫 6 個座位的名稱名單
2. 讀寫整份遊戲狀態（GameStateRecord）
3. 清除遊戲狀態（名稱保留）

底層是 stored_entries key-value 表。所有讀寫失敗都在這一層處理：
- 讀取失敗 → 視為「沒有存檔」
- 寫入失敗 → 記錄 log 後忽略
計分畫面永遠不會因為持久化出錯而中斷。
"""
import json
import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DataCorruption
from core.game_constants import MAX_PLAYERS
from database import transactional
from models import StoredEntry
from schemas import GameStateRecord
from services.naming_service import normalize_roster

logger = logging.getLogger(__name__)

PLAYER_NAMES_KEY = "Scoreboard.PlayerNames"
GAME_STATE_KEY = "Scoreboard.GameState"


def get_entry(db: Session, key: str) -> Optional[str]:
    entry = db.query(StoredEntry).filter(StoredEntry.key == key).first()
    return entry.value if entry else None


@transactional
def put_entry(db: Session, key: str, value: str) -> None:
    """
    寫入（或覆蓋）一筆 key-value

    注意：
        - 使用 @transactional，自動處理 commit/rollback
    """
    entry = db.query(StoredEntry).filter(StoredEntry.key == key).first()
    if entry:
        entry.value = value
    else:
        db.add(StoredEntry(key=key, value=value))


@transactional
def delete_entry(db: Session, key: str) -> None:
    db.query(StoredEntry).filter(StoredEntry.key == key).delete()


def decode_player_names(raw: str) -> List[str]:
    """
    解析名稱名單

    異常：
        DataCorruption: 不是字串陣列
    """
    try:
        names = json.loads(raw)
    except ValueError as e:
        raise DataCorruption(PLAYER_NAMES_KEY, str(e)) from e

    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise DataCorruption(PLAYER_NAMES_KEY, "expected a list of strings")
    return names


def decode_game_state(raw: str) -> GameStateRecord:
    """
    解析遊戲狀態

    異常：
        DataCorruption: JSON 或欄位格式不正確
    """
    try:
        return GameStateRecord.model_validate_json(raw)
    except ValidationError as e:
        raise DataCorruption(GAME_STATE_KEY, str(e)) from e


class SqlGameDataStore:
    """以 SQLAlchemy key-value 表實作的 Persistence Gateway"""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def load_player_names(self) -> List[str]:
        """
        讀取名稱名單，保證回傳剛好 6 個名稱

        沒有存檔或資料損毀時回傳預設名稱
        """
        saved: List[str] = []
        try:
            with self._session_factory() as db:
                raw = get_entry(db, PLAYER_NAMES_KEY)
            if raw is not None:
                saved = decode_player_names(raw)
        except (DataCorruption, SQLAlchemyError) as e:
            logger.error(f"Failed to load player names: {e}", exc_info=True)
            saved = []

        return normalize_roster(saved)

    def save_player_names(self, names: Sequence[str]) -> None:
        valid_names = list(names[:MAX_PLAYERS])
        try:
            with self._session_factory() as db:
                put_entry(db, PLAYER_NAMES_KEY, json.dumps(valid_names))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save player names: {e}", exc_info=True)

    def load_game_state(self) -> Optional[GameStateRecord]:
        """
        讀取遊戲狀態

        返回：
            GameStateRecord，沒有存檔或無法解析時為 None
        """
        try:
            with self._session_factory() as db:
                raw = get_entry(db, GAME_STATE_KEY)
            if raw is None:
                return None
            return decode_game_state(raw)
        except (DataCorruption, SQLAlchemyError) as e:
            logger.error(f"Failed to load game state: {e}", exc_info=True)
            return None

    def save_game_state(self, state: GameStateRecord) -> None:
        try:
            payload = state.to_json()
            with self._session_factory() as db:
                put_entry(db, GAME_STATE_KEY, payload)
        except (ValueError, SQLAlchemyError) as e:
            logger.error(f"Failed to save game state: {e}", exc_info=True)
            return

        logger.debug(f"Saved game state: {state.rounds} rounds, {state.active_player_count} players")

    def clear_game_data(self) -> None:
        """只刪除遊戲狀態，名稱名單獨立保存"""
        try:
            with self._session_factory() as db:
                delete_entry(db, GAME_STATE_KEY)
        except SQLAlchemyError as e:
            logger.error(f"Failed to clear game data: {e}", exc_info=True)
            return

        logger.info("Cleared saved game state")
