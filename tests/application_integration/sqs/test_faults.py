import pytest
from botocore.exceptions import BotoCoreError, ClientError

from pysqsmock.mocks.application_integration.sqs.exceptions import SimulatedClientFault, SimulatedServiceFault
from pysqsmock.mocks.application_integration.sqs.faults import FaultInjector

pytestmark = pytest.mark.order(1)


@pytest.fixture
def injector():
    return FaultInjector()


@pytest.mark.parametrize("value", [None, "", "   ", "plain-queue", 42])
def test_check_ignores_ordinary_input(injector, value):
    injector.check(value, "SendMessage")


def test_check_client_marker(injector):
    with pytest.raises(SimulatedClientFault) as exc:
        injector.check("xx-Mock-Aws-Client-Exception-xx", "SendMessage")
    assert isinstance(exc.value, BotoCoreError)
    assert "SendMessage" in str(exc.value)


def test_check_service_marker(injector):
    with pytest.raises(SimulatedServiceFault) as exc:
        injector.check("MOCK-AWS-SERVICE-EXCEPTION", "DeleteMessage")
    assert isinstance(exc.value, ClientError)
    assert exc.value.response["ResponseMetadata"]["HTTPStatusCode"] == 500
    assert exc.value.operation_name == "DeleteMessage"


def test_client_marker_takes_precedence(injector):
    with pytest.raises(SimulatedClientFault):
        injector.check("mock-aws-service-exception mock-aws-client-exception", "ListQueues")


def test_check_all_stops_at_first_marker(injector):
    with pytest.raises(SimulatedServiceFault):
        injector.check_all(["QueueArn", "mock-aws-service-exception", "mock-aws-client-exception"],
                           "GetQueueAttributes")
