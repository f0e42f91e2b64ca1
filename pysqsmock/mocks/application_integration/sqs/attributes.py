from typing import Dict, Iterable, Optional

from pysqsmock.mocks.application_integration.sqs.exceptions import (
    InvalidAttributeName,
    InvalidRequest,
    NotYetImplemented,
)
from pysqsmock.mocks.application_integration.sqs.store import QueueRegistry

ALL = "All"
NUM_MESSAGES = "ApproximateNumberOfMessages"
NUM_NOT_VISIBLE = "ApproximateNumberOfMessagesNotVisible"
NUM_DELAYED = "ApproximateNumberOfMessagesDelayed"
QUEUE_ARN = "QueueArn"
VISIBILITY_TIMEOUT = "VisibilityTimeout"
CREATED_TIMESTAMP = "CreatedTimestamp"
MODIFIED_TIMESTAMP = "LastModifiedTimestamp"
POLICY = "Policy"
MAX_SIZE = "MaximumMessageSize"
RETENTION = "MessageRetentionPeriod"
DELAY_SECONDS = "DelaySeconds"
REDRIVE_POLICY = "RedrivePolicy"

ARN_PREFIX = "arn:aws:"

SUPPORTED_ATTRIBUTES = (NUM_MESSAGES, NUM_NOT_VISIBLE, QUEUE_ARN)
UNSUPPORTED_ATTRIBUTES = (
    VISIBILITY_TIMEOUT, CREATED_TIMESTAMP, MODIFIED_TIMESTAMP, POLICY, MAX_SIZE,
    RETENTION, NUM_DELAYED, DELAY_SECONDS, REDRIVE_POLICY,
)
VALID_ATTRIBUTES = frozenset((ALL,) + SUPPORTED_ATTRIBUTES + UNSUPPORTED_ATTRIBUTES)
READ_ONLY_ATTRIBUTES = frozenset((
    ALL, NUM_MESSAGES, NUM_NOT_VISIBLE, NUM_DELAYED, QUEUE_ARN, CREATED_TIMESTAMP, MODIFIED_TIMESTAMP,
))


def queue_arn(url: str) -> str:
    return f"{ARN_PREFIX}{url}"


class AttributeReporter:
    """Computes queue attributes from the live registry state."""

    def __init__(self, registry: QueueRegistry):
        self.registry = registry

    @staticmethod
    def validate_names(names: Iterable[str]):
        for name in names:
            if name not in VALID_ATTRIBUTES:
                raise InvalidAttributeName(f"Invalid Attribute Name: {name}")

    def get(self, url: str, names: Optional[Iterable[str]] = None) -> Dict[str, str]:
        names = list(names or [ALL])
        self.validate_names(names)
        queue = self.registry.get(url)

        requested = set(names) - {ALL}
        if ALL in names:
            requested.update(SUPPORTED_ATTRIBUTES)
        unsupported = requested.intersection(UNSUPPORTED_ATTRIBUTES)
        if unsupported:
            raise NotYetImplemented()

        backlog, in_flight = queue.counts()
        computed = {
            NUM_MESSAGES: str(backlog),
            NUM_NOT_VISIBLE: str(in_flight),
            QUEUE_ARN: queue_arn(url),
        }
        return {name: value for name, value in computed.items() if name in requested}

    def set(self, url: str, attributes: Dict[str, str]):
        if not attributes or not isinstance(attributes, dict):
            raise InvalidRequest("Attributes is required")
        self.validate_names(attributes)
        for name in attributes:
            if name in READ_ONLY_ATTRIBUTES:
                raise InvalidRequest(f"Cannot modify read-only attribute: {name}")
        self.registry.get(url)
        raise NotYetImplemented()
