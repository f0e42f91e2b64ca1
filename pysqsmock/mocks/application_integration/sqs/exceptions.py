from botocore.exceptions import BotoCoreError, ClientError

NYI_MESSAGE = (
    "Not Yet Implemented!\n"
    "If you'd like to contribute your code, please send a pull request to the pysqsmock repository."
)


class SQSMockError(ValueError):
    code = "InvalidRequest"

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidRequest(SQSMockError):
    code = "InvalidRequest"


class InvalidArgument(InvalidRequest):
    code = "InvalidParameterValue"


class QueueNotFound(SQSMockError):
    code = "AWS.SimpleQueueService.NonExistentQueue"


class InvalidReceiptHandle(SQSMockError):
    code = "ReceiptHandleIsInvalid"


class InvalidAttributeName(SQSMockError):
    code = "InvalidAttributeName"


class NotYetImplemented(NotImplementedError):
    def __init__(self, message=NYI_MESSAGE):
        super().__init__(message)


class SimulatedClientFault(BotoCoreError):
    """Raised when a caller-supplied string carries the client exception marker."""
    fmt = "Forced client exception during {operation_name}"


class SimulatedServiceFault(ClientError):
    """Raised when a caller-supplied string carries the service exception marker."""

    def __init__(self, operation_name):
        super().__init__(
            {
                "Error": {
                    "Code": "MockServiceException",
                    "Message": "Forced service exception",
                },
                "ResponseMetadata": {"HTTPStatusCode": 500},
            },
            operation_name,
        )
