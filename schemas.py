"""
持久化用的資料結構（pydantic）

欄位名稱沿用既有儲存格式：activePlayerCount / lastModified，
Match 在 top 欄位以 -257 儲存。
"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RoundScoreRecord(BaseModel):
    top: Optional[int] = None
    bottom: Optional[int] = None


class PlayerRecord(BaseModel):
    id: UUID
    name: str
    scores: List[RoundScoreRecord] = Field(default_factory=list)


class GameStateRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    players: List[PlayerRecord]
    rounds: int = Field(ge=0)
    active_player_count: int = Field(alias="activePlayerCount")
    last_modified: datetime = Field(
        alias="lastModified",
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
