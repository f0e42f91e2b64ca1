import copy
import json
import logging
import threading
from collections import deque
from hashlib import md5
from typing import Dict, Any, List, Optional, Tuple

from pysqsmock.mocks.application_integration.sqs.exceptions import (
    InvalidArgument,
    InvalidReceiptHandle,
    QueueNotFound,
)
from pysqsmock.mocks.application_integration.sqs.identifiers import IdGenerator, global_id_generator

LOG = logging.getLogger(__name__)

MIN_RECEIVE_COUNT = 1
MAX_RECEIVE_COUNT = 10


def md5_of_body(body: Optional[str]) -> str:
    return md5((body or "").encode("utf-8")).hexdigest()


def md5_of_attributes(attributes: Optional[Dict[str, Any]]) -> Optional[str]:
    if not attributes:
        return None
    return md5(json.dumps(attributes, sort_keys=True, default=str).encode("utf-8")).hexdigest()


class SqsMessage:
    def __init__(self, message_id: str, body: Optional[str], attributes: Optional[Dict[str, Any]] = None):
        self.message_id = message_id
        self.body = body or ""
        self.md5_of_body = md5_of_body(self.body)
        self.attributes = copy.deepcopy(attributes or {})
        self.md5_of_attributes = md5_of_attributes(self.attributes)
        self.receipt_handle = None

    def __repr__(self):
        return f"SqsMessage({self.message_id!r}, receipt_handle={self.receipt_handle!r})"


class SqsQueue:
    """Backlog and in-flight bookkeeping for one queue, guarded by a single lock."""

    def __init__(self, url: str):
        self.url = url
        self.backlog = deque()
        self.in_flight: Dict[str, SqsMessage] = {}
        self.deleted = False
        self.lock = threading.Lock()

    def _ensure_open(self):
        if self.deleted:
            raise QueueNotFound(f"Queue {self.url} does not exist")

    def put(self, message: SqsMessage):
        with self.lock:
            self._ensure_open()
            self.backlog.append(message)

    def take(self, max_count: int, id_generator: IdGenerator) -> List[SqsMessage]:
        delivered = []
        with self.lock:
            self._ensure_open()
            while self.backlog and len(delivered) < max_count:
                message = self.backlog.popleft()
                message.receipt_handle = id_generator.receipt_handle()
                self.in_flight[message.receipt_handle] = message
                delivered.append(message)
        return delivered

    def acknowledge(self, receipt_handle: str) -> SqsMessage:
        with self.lock:
            self._ensure_open()
            message = self.in_flight.pop(receipt_handle, None)
        if message is None:
            raise InvalidReceiptHandle(f"Receipt handle {receipt_handle} is invalid or message already deleted")
        message.receipt_handle = None
        return message

    def counts(self) -> Tuple[int, int]:
        with self.lock:
            self._ensure_open()
            return len(self.backlog), len(self.in_flight)

    def close(self):
        with self.lock:
            self.deleted = True
            self.backlog.clear()
            self.in_flight.clear()


class QueueRegistry:
    def __init__(self, url_prefix: str):
        self.url_prefix = url_prefix
        self._queues: Dict[str, SqsQueue] = {}
        self._lock = threading.RLock()

    def resolve(self, name: str) -> str:
        return f"{self.url_prefix}{name}"

    def create(self, name: str) -> str:
        url = self.resolve(name)
        with self._lock:
            if url not in self._queues:
                self._queues[url] = SqsQueue(url)
                LOG.debug("Created queue %s", url)
        return url

    def exists(self, url: str) -> bool:
        with self._lock:
            return url in self._queues

    def get(self, url: str) -> SqsQueue:
        with self._lock:
            queue = self._queues.get(url)
        if queue is None:
            raise QueueNotFound(f"Queue {url} does not exist")
        return queue

    def delete(self, url: str):
        with self._lock:
            queue = self._queues.pop(url, None)
        if queue is None:
            raise QueueNotFound(f"Queue {url} does not exist")
        queue.close()
        LOG.debug("Deleted queue %s", url)

    def list(self, prefix: Optional[str] = None) -> List[str]:
        effective_prefix = self.resolve(prefix or "")
        with self._lock:
            return sorted(url for url in self._queues if url.startswith(effective_prefix))


class MessageStore:
    """
    Delivery engine on top of a :class:`QueueRegistry`.

    Messages are delivered strictly in send order. A delivered message moves
    to its queue's in-flight map under a fresh receipt handle and stays there
    until it is deleted; nothing ever returns it to the backlog.
    """

    def __init__(self, registry: QueueRegistry, id_generator: IdGenerator = None):
        self.registry = registry
        self.id_generator = id_generator or global_id_generator()

    def send(self, url: str, body: Optional[str], attributes: Optional[Dict[str, Any]] = None) -> SqsMessage:
        queue = self.registry.get(url)
        message = SqsMessage(self.id_generator.message_id(), body, attributes)
        queue.put(message)
        LOG.debug("Enqueued message %s on %s", message.message_id, url)
        return message

    def receive(self, url: str, max_count: Optional[int]) -> List[SqsMessage]:
        if (
                not isinstance(max_count, int)
                or isinstance(max_count, bool)
                or not MIN_RECEIVE_COUNT <= max_count <= MAX_RECEIVE_COUNT
        ):
            raise InvalidArgument(
                f"MaxNumberOfMessages must be a value between [{MIN_RECEIVE_COUNT},{MAX_RECEIVE_COUNT}]"
            )
        queue = self.registry.get(url)
        delivered = queue.take(max_count, self.id_generator)
        LOG.debug("De-queued %d message(s) from %s", len(delivered), url)
        return delivered

    def delete(self, url: str, receipt_handle: str):
        queue = self.registry.get(url)
        message = queue.acknowledge(receipt_handle)
        LOG.debug("Deleted message %s from %s", message.message_id, url)
