"""
資料模型

- StoredEntry：key-value 持久化表（玩家名稱、遊戲狀態）
- RoundPhase：回合階段（可編輯 / 已凍結）
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from database import Base


class RoundPhase(str, enum.Enum):
    """回合階段：只有最新的回合可以編輯，其餘回合凍結並接受檢查"""
    EDITABLE = "editable"
    FROZEN = "frozen"


def _utcnow():
    return datetime.now(timezone.utc)


class StoredEntry(Base):
    """
    Key-value 儲存項目

    value 一律存 JSON 文字：
    - Scoreboard.PlayerNames → 字串陣列
    - Scoreboard.GameState → GameStateRecord 序列化結果
    """
    __tablename__ = "stored_entries"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
