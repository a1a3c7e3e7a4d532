"""
Auto-save：延遲（debounce）寫入

每次狀態變更呼叫 schedule()，在安靜一段時間（預設 500ms）後才真正寫入。
save_callback 在計時器觸發時才擷取狀態，所以寫入的永遠是最新狀態，
不會是中間的舊快照。
"""
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AutoSaver:
    """Debounced save 排程器"""

    def __init__(
        self,
        save_callback: Callable[[], None],
        delay_seconds: float = 0.5,
        timer_factory=threading.Timer
    ):
        self._save_callback = save_callback
        self._delay_seconds = delay_seconds
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule(self) -> None:
        """
        排程一次寫入（重設計時器）

        注意：
            - 已有排程時會先取消，再重新計時
            - 計時器是 daemon，程式結束前請呼叫 flush()
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(self._delay_seconds, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """取消排程並立即寫入"""
        self.cancel()
        self._run_callback()

    def _fire(self, generation: int) -> None:
        with self._lock:
            # 已被新的排程取代（cancel 來不及攔下已觸發的計時器）
            if generation != self._generation:
                return
            self._timer = None
        self._run_callback()

    def _run_callback(self) -> None:
        try:
            self._save_callback()
        except Exception as e:
            # 寫入失敗不能影響記憶體中的狀態
            logger.error(f"Auto-save failed: {e}", exc_info=True)
