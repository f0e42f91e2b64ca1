import copy
import re
import warnings
from typing import Dict, Any

from pysqsmock.config import DEFAULT_SETTINGS
from pysqsmock.mocks.application_integration.sqs.attributes import AttributeReporter
from pysqsmock.mocks.application_integration.sqs.exceptions import (
    InvalidRequest,
    NotYetImplemented,
    QueueNotFound,
)
from pysqsmock.mocks.application_integration.sqs.faults import (
    FaultInjector,
    MARKER_CLIENT_EXCEPTION,
    MARKER_SERVICE_EXCEPTION,
)
from pysqsmock.mocks.application_integration.sqs.identifiers import IdGenerator
from pysqsmock.mocks.application_integration.sqs.store import MessageStore, QueueRegistry, md5_of_attributes
from pysqsmock.mocks.base_mock import MockBase

DEFAULT_ACCOUNT_ID = DEFAULT_SETTINGS["account_id"]
DEFAULT_DOMAIN = DEFAULT_SETTINGS["domain"]


class MockSQSValidator:
    QUEUE_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

    @staticmethod
    def _raise_if(condition, message):
        if condition:
            raise InvalidRequest(message)

    @classmethod
    def queue_name(cls, name: str):
        cls._raise_if(not isinstance(name, str) or not name.strip(), "QueueName is required")
        cls._raise_if(len(name) > 80, "QueueName should be max of 80 characters")
        base_name = name[:-5] if name.endswith(".fifo") else name
        cls._raise_if(
            not re.fullmatch(cls.QUEUE_NAME_PATTERN, base_name),
            "QueueName can only contain alphanumeric characters, hyphens and underscores"
        )

    @classmethod
    def queue_url(cls, url: str):
        cls._raise_if(not isinstance(url, str) or not url, "QueueUrl is required")

    @classmethod
    def receipt_handle(cls, receipt_handle: str):
        cls._raise_if(not isinstance(receipt_handle, str) or not receipt_handle, "ReceiptHandle is required")

    @classmethod
    def message_attributes(cls, attrs):
        cls._raise_if(attrs is not None and not isinstance(attrs, dict), "MessageAttributes must be a dict")

    @classmethod
    def attribute_names(cls, names):
        cls._raise_if(
            names is not None and (isinstance(names, str) or not isinstance(names, (list, tuple, set))),
            "AttributeNames must be a list"
        )

    @classmethod
    def max_results(cls, max_results):
        if max_results is None:
            return
        cls._raise_if(
            not isinstance(max_results, int) or not 1 <= max_results <= 1000,
            "MaxResults must be an integer between 1 and 1000"
        )


Validator = MockSQSValidator


class MockSQS(MockBase):
    """
    In-memory SQS client.

    Every operation runs the caller's strings through the fault injector first,
    then resolves the queue, then reads or mutates the store. Operations that
    are part of the SQS contract but not emulated are listed in
    ``_supported_methods`` without an implementation and fail uniformly with
    :class:`NotYetImplemented`.
    """

    _supported_methods = [
        "create_queue",
        "get_queue_url",
        "list_queues",
        "delete_queue",
        "send_message",
        "receive_message",
        "delete_message",
        "get_queue_attributes",
        "set_queue_attributes",
        "set_region",
        "send_message_batch",
        "delete_message_batch",
        "change_message_visibility",
        "change_message_visibility_batch",
        "add_permission",
        "remove_permission",
        "list_dead_letter_source_queues",
        "purge_queue",
        "set_endpoint",
        "get_cached_response_metadata",
        "shutdown",
    ]

    def __init__(self, region_name, account_id=DEFAULT_ACCOUNT_ID, domain=DEFAULT_DOMAIN,
                 client_marker=MARKER_CLIENT_EXCEPTION, service_marker=MARKER_SERVICE_EXCEPTION,
                 id_generator: IdGenerator = None):
        self.region_name = region_name
        self.account_id = account_id
        self.url_prefix = f"http://sqs.{region_name}.{domain}/{account_id}/"
        self.faults = FaultInjector(client_marker, service_marker)
        self.registry = QueueRegistry(self.url_prefix)
        self.store = MessageStore(self.registry, id_generator)
        self.reporter = AttributeReporter(self.registry)

    def _not_implemented(self, name):
        return NotYetImplemented()

    def _paginate_queues(self, items, max_results=None, next_token=None):
        try:
            start_index = int(next_token) if next_token is not None else 0
        except ValueError:
            start_index = 0

        end_index = len(items)
        if max_results is not None:
            end_index = min(start_index + max_results, len(items))
            next_token = str(end_index) if end_index < len(items) else None
        else:
            next_token = None
        return items[start_index:end_index], next_token

    def create_queue(self, **kwargs) -> Dict[str, Any]:
        queue_name = kwargs.get("QueueName")
        self.faults.check(queue_name, "CreateQueue")
        Validator.queue_name(queue_name)
        if kwargs.get("Attributes") or kwargs.get("tags"):
            warnings.warn("Queue Attributes and tags are ignored in local mock mode.")

        return {
            "QueueUrl": self.registry.create(queue_name),
        }

    def get_queue_url(self, **kwargs) -> Dict[str, Any]:
        queue_name = kwargs.get("QueueName")
        self.faults.check(queue_name, "GetQueueUrl")
        Validator.queue_name(queue_name)
        queue_url = self.registry.resolve(queue_name)
        if not self.registry.exists(queue_url):
            raise QueueNotFound(f"Queue {queue_name} does not exist")

        return {
            "QueueUrl": queue_url,
        }

    def list_queues(self, **kwargs) -> Dict[str, Any]:
        queue_prefix = kwargs.get("QueueNamePrefix")
        next_token = kwargs.get("NextToken")
        max_results = kwargs.get("MaxResults")
        self.faults.check(queue_prefix, "ListQueues")
        Validator.max_results(max_results)
        queue_urls = self.registry.list(queue_prefix)
        page, next_token = self._paginate_queues(queue_urls, max_results, next_token)

        response = {
            "QueueUrls": page,
        }
        if next_token:
            response["NextToken"] = next_token
        return response

    def delete_queue(self, **kwargs):
        queue_url = kwargs.get("QueueUrl")
        self.faults.check(queue_url, "DeleteQueue")
        Validator.queue_url(queue_url)
        self.registry.delete(queue_url)

    def send_message(self, **kwargs) -> Dict[str, Any]:
        queue_url = kwargs.get("QueueUrl")
        message_body = kwargs.get("MessageBody")
        message_attributes = kwargs.get("MessageAttributes")
        self.faults.check(queue_url, "SendMessage")
        self.faults.check(message_body, "SendMessage")
        Validator.queue_url(queue_url)
        Validator.message_attributes(message_attributes)
        if kwargs.get("DelaySeconds"):
            warnings.warn("DelaySeconds is not supported in local mock mode, the message is visible immediately.")

        message = self.store.send(queue_url, message_body, message_attributes)
        response = {
            "MessageId": message.message_id,
            "MD5OfMessageBody": message.md5_of_body,
        }
        if message.md5_of_attributes:
            response["MD5OfMessageAttributes"] = message.md5_of_attributes
        return response

    def receive_message(self, **kwargs) -> Dict[str, Any]:
        queue_url = kwargs.get("QueueUrl")
        attribute_names = kwargs.get("MessageAttributeNames") or []
        self.faults.check(queue_url, "ReceiveMessage")
        Validator.queue_url(queue_url)
        if kwargs.get("WaitTimeSeconds") or kwargs.get("VisibilityTimeout") is not None:
            warnings.warn("WaitTimeSeconds and VisibilityTimeout are not supported in local mock mode.")

        messages = self.store.receive(queue_url, kwargs.get("MaxNumberOfMessages"))
        return {
            "Messages": [self._to_response(m, attribute_names) for m in messages],
        }

    @staticmethod
    def _to_response(message, attribute_names):
        msg_response = {
            "MessageId": message.message_id,
            "ReceiptHandle": message.receipt_handle,
            "MD5OfBody": message.md5_of_body,
            "Body": message.body,
        }
        attributes = copy.deepcopy(message.attributes)
        if attribute_names and not {"All", ".*"}.intersection(attribute_names):
            attributes = {k: v for k, v in attributes.items() if k in attribute_names}
        if attributes:
            msg_response["MessageAttributes"] = attributes
            msg_response["MD5OfMessageAttributes"] = md5_of_attributes(attributes)
        return msg_response

    def delete_message(self, **kwargs):
        queue_url = kwargs.get("QueueUrl")
        receipt_handle = kwargs.get("ReceiptHandle")
        self.faults.check(queue_url, "DeleteMessage")
        self.faults.check(receipt_handle, "DeleteMessage")
        Validator.queue_url(queue_url)
        Validator.receipt_handle(receipt_handle)
        self.store.delete(queue_url, receipt_handle)

    def get_queue_attributes(self, **kwargs) -> Dict[str, Any]:
        queue_url = kwargs.get("QueueUrl")
        attribute_names = kwargs.get("AttributeNames")
        self.faults.check(queue_url, "GetQueueAttributes")
        if isinstance(attribute_names, (list, tuple, set)):
            self.faults.check_all(attribute_names, "GetQueueAttributes")
        else:
            self.faults.check(attribute_names, "GetQueueAttributes")
        Validator.attribute_names(attribute_names)
        Validator.queue_url(queue_url)

        return {
            "Attributes": self.reporter.get(queue_url, attribute_names),
        }

    def set_queue_attributes(self, **kwargs):
        queue_url = kwargs.get("QueueUrl")
        attributes = kwargs.get("Attributes")
        self.faults.check(queue_url, "SetQueueAttributes")
        if isinstance(attributes, dict):
            self.faults.check_all(attributes, "SetQueueAttributes")
        Validator.queue_url(queue_url)
        self.reporter.set(queue_url, attributes)

    def set_region(self, region_name):
        warnings.warn(f"Region {region_name} is ignored, queues stay in {self.region_name} in local mock mode.")
