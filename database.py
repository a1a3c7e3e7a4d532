from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache, wraps
import logging

from core.game_constants import DEFAULT_PLAYER_COUNT

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    database_url: str = "sqlite:///./vierbure.db"
    autosave_debounce_ms: int = 500
    default_player_count: int = DEFAULT_PLAYER_COUNT

    model_config = SettingsConfigDict(env_file=".env", env_prefix="VIERBURE_")


@lru_cache()
def get_settings():
    return Settings()


def create_db_engine(database_url: str):
    # Auto-save 由計時器執行緒觸發，SQLite 連線必須允許跨執行緒使用
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
        pool_pre_ping=True
    )


def create_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


settings = get_settings()

engine = create_db_engine(settings.database_url)
SessionLocal = create_session_factory(engine)
Base = declarative_base()


def transactional(func):
    """
    Transaction decorator：確保資料庫操作的原子性

    使用方式：
        @transactional
        def put_entry(db: Session, key: str, value: str):
            # 所有 DB 操作都在一個 transaction 內
            db.add(StoredEntry(key=key, value=value))
            # 不需要手動 commit，decorator 會處理

    如果函式內發生異常：
        - 自動 rollback
        - 異常會被重新拋出（讓上層處理）

    注意：
        - 第一個參數必須是 db: Session
        - 不要在函式內手動 commit（decorator 會處理）
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        # 找出 db session（可能在 args 或 kwargs）
        db = None
        if args and isinstance(args[0], Session):
            db = args[0]
        elif 'db' in kwargs:
            db = kwargs['db']

        if db is None:
            raise ValueError(
                f"@transactional requires 'db: Session' as first argument, "
                f"but got args={args}, kwargs={kwargs}"
            )

        try:
            result = func(*args, **kwargs)
            db.commit()
            return result
        except Exception as e:
            logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
            db.rollback()
            raise

    return wrapper
