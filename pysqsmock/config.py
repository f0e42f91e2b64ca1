import logging
import threading

LOG = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "account_id": "000000000000",
    "domain": "pysqsmock.local",
    "client_marker": "mock-aws-client-exception",
    "service_marker": "mock-aws-service-exception",
}


class MockConfig:
    """
    Process-wide switch for local mock mode.

    Mocks are kept per service and region so every client created for the same
    local region shares one in-memory store, the way clients of the real
    service share its queues.
    """

    def __init__(self):
        self.active = False
        self.settings = dict(DEFAULT_SETTINGS)
        self._mocks = {}
        self._lock = threading.Lock()

    def init(self, **settings):
        unknown = set(settings) - set(DEFAULT_SETTINGS)
        if unknown:
            raise ValueError(f"Unknown mock settings: {', '.join(sorted(unknown))}")
        with self._lock:
            self.settings = {**DEFAULT_SETTINGS, **settings}
            self._mocks.clear()
            self.active = True
        LOG.debug("Local mock mode configured with %s", self.settings)

    def get_mock(self, service_name, region_name, factory):
        with self._lock:
            key = (service_name, region_name)
            if key not in self._mocks:
                self._mocks[key] = factory(region_name, **self.settings)
            return self._mocks[key]

    def cleanup(self):
        with self._lock:
            self._mocks.clear()
            self.settings = dict(DEFAULT_SETTINGS)
            self.active = False
        LOG.debug("Local mock mode cleaned up")


config = MockConfig()
