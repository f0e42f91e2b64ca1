from typing import Iterable, Optional

from pysqsmock.config import DEFAULT_SETTINGS
from pysqsmock.mocks.application_integration.sqs.exceptions import SimulatedClientFault, SimulatedServiceFault

MARKER_CLIENT_EXCEPTION = DEFAULT_SETTINGS["client_marker"]
MARKER_SERVICE_EXCEPTION = DEFAULT_SETTINGS["service_marker"]


class FaultInjector:
    """
    Test hook that turns reserved marker substrings into simulated failures.

    Any string handed to the engine (queue name or url, message body, receipt
    handle, attribute name, list prefix) is run through ``check`` before the
    engine touches its state. Matching is case-insensitive and the client
    marker wins when both are present.
    """

    def __init__(self, client_marker: str = MARKER_CLIENT_EXCEPTION,
                 service_marker: str = MARKER_SERVICE_EXCEPTION):
        self.client_marker = client_marker.lower()
        self.service_marker = service_marker.lower()

    def check(self, value: Optional[str], operation_name: str):
        src = value.lower() if isinstance(value, str) and value.strip() else ""
        if not src:
            return
        if self.client_marker in src:
            raise SimulatedClientFault(operation_name=operation_name)
        if self.service_marker in src:
            raise SimulatedServiceFault(operation_name)

    def check_all(self, values: Iterable[Optional[str]], operation_name: str):
        for value in values:
            self.check(value, operation_name)
