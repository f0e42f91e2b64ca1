import itertools
import threading
import time
from typing import Optional

MESSAGE_ID_PREFIX = "mock-aws-message-id-"
RECEIPT_HANDLE_PREFIX = "mock-aws-receipt-id-"


class IdGenerator:
    """
    Process-wide sequence shared by message ids and receipt handles.

    The counter starts at the current time in microseconds so ids issued by a
    restarted process are unlikely to collide with ones a caller kept around.
    """

    def __init__(self, start: Optional[int] = None):
        if start is None:
            start = time.time_ns() // 1000
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_value(self) -> int:
        with self._lock:
            return next(self._counter)

    def message_id(self) -> str:
        return f"{MESSAGE_ID_PREFIX}{self.next_value()}"

    def receipt_handle(self) -> str:
        return f"{RECEIPT_HANDLE_PREFIX}{self.next_value()}"


_global_generator = IdGenerator()


def global_id_generator() -> IdGenerator:
    return _global_generator
