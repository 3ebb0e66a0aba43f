"""Background loading of population data so the window never blocks on HTTP.

Each load carries a request id. When the user changes the filter while a
request is in flight, the older result arrives with a stale id and is
dropped by the controller.
"""

from __future__ import annotations
from typing import Any, Callable, Optional
from PySide6.QtCore import QThread, Signal
import logging

logger = logging.getLogger(__name__)


class AsyncDataLoader(QThread):
    """Worker thread running one load function.

    Signals:
        loaded: (request_id, data) when loading succeeds
        failed: (request_id, error_msg) when loading raises

    Example:
        loader = AsyncDataLoader(7, lambda: service.load_table_rows("Nation", "latest"))
        loader.loaded.connect(on_rows)
        loader.failed.connect(on_error)
        loader.start()
    """

    loaded = Signal(int, object)
    failed = Signal(int, str)

    def __init__(self, request_id: int, load_func: Callable[[], Any], parent: Optional[QThread] = None):
        """Initialize loader.

        Args:
            request_id: Identifier echoed back with the result
            load_func: Function called in the background thread
            parent: Parent QObject
        """
        super().__init__(parent)
        self.request_id = request_id
        self.load_func = load_func

    def run(self):
        try:
            logger.debug(f"Load #{self.request_id} started")
            result = self.load_func()
        except Exception as e:
            logger.error(f"Load #{self.request_id} failed: {e}", exc_info=True)
            self.failed.emit(self.request_id, str(e))
            return
        logger.debug(f"Load #{self.request_id} finished")
        self.loaded.emit(self.request_id, result)


__all__ = ["AsyncDataLoader"]
