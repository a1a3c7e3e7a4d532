from contextlib import contextmanager

from database import Base, engine, SessionLocal, create_db_engine, create_session_factory
from core.game_data_store import SqlGameDataStore
from core.scoreboard_manager import ScoreboardManager
import models  # noqa: F401  註冊 stored_entries 表


@contextmanager
def scoreboard_session(settings=None):
    """
    建立一個計分表 session

    Startup: 建立資料表、載入名稱與存檔
    Shutdown: 立即寫入尚未送出的 auto-save

    參數：
        settings: Settings；有傳入時依 settings.database_url 建立專用 engine，
                  否則使用 database 模組的預設 engine
    """
    if settings is not None:
        session_engine = create_db_engine(settings.database_url)
        session_factory = create_session_factory(session_engine)
    else:
        session_engine = engine
        session_factory = SessionLocal

    Base.metadata.create_all(bind=session_engine)
    scoreboard = ScoreboardManager(SqlGameDataStore(session_factory), settings=settings)
    try:
        yield scoreboard
    finally:
        scoreboard.flush()
        if session_engine is not engine:
            session_engine.dispose()
