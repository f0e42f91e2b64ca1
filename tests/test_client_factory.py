from unittest.mock import patch, MagicMock

import pytest

from pysqsmock import configure_mock, cleanup_mock, client
from pysqsmock.config import DEFAULT_SETTINGS, MockConfig
from pysqsmock.mocks.application_integration.sqs.mock import MockSQS

pytestmark = pytest.mark.order(3)


@pytest.fixture
def mock_config():
    with patch("pysqsmock.config.config") as mock_cfg:
        mock_cfg.active = False
        yield mock_cfg


@pytest.fixture
def live_config():
    configure_mock()
    yield
    cleanup_mock()


def test_configure_mock_initializes_config(mock_config):
    configure_mock(account_id="123456789012")
    mock_config.init.assert_called_once_with(account_id="123456789012")


def test_cleanup_mock_calls_cleanup(mock_config):
    cleanup_mock()
    mock_config.cleanup.assert_called_once()


def test_client_returns_mock_sqs(mock_config):
    mock_config.active = True
    mock_instance = MagicMock()
    mock_config.get_mock.return_value = mock_instance

    result = client("sqs", region_name="local-us-east-1")

    mock_config.get_mock.assert_called_once_with("sqs", "local-us-east-1", MockSQS)
    assert result == mock_instance


def test_client_not_configured(mock_config):
    mock_config.active = False

    with pytest.raises(RuntimeError, match="Mock not configured"):
        client("sqs", region_name="local-us-east-1")


def test_client_other_service_not_implemented(mock_config):
    mock_config.active = True

    with pytest.raises(NotImplementedError, match="Local Mock not implemented for s3"):
        client("s3", region_name="local-us-east-1")


def test_client_invalid_local_region(mock_config):
    with patch("pysqsmock.mocks.base_mock.validate_region", return_value=False):
        with pytest.raises(RuntimeError, match="Region local-test not supported"):
            client("sqs", region_name="local-test")


@patch("boto3.client")
def test_client_returns_boto3_client(mock_boto_client):
    mock_client_instance = MagicMock()
    mock_boto_client.return_value = mock_client_instance

    result = client("sqs", region_name="us-east-1")

    mock_boto_client.assert_called_once_with("sqs", region_name="us-east-1")
    assert result == mock_client_instance


def test_clients_share_queues_per_region(live_config):
    first = client("sqs", region_name="local-us-east-1")
    second = client("sqs", region_name="local-us-east-1")
    other_region = client("sqs", region_name="local-eu-west-1")

    queue_url = first.create_queue(QueueName="shared")["QueueUrl"]

    assert first is second
    assert second.get_queue_url(QueueName="shared")["QueueUrl"] == queue_url
    assert other_region.list_queues()["QueueUrls"] == []


def test_cleanup_discards_queues(live_config):
    client("sqs", region_name="local-us-east-1").create_queue(QueueName="gone")
    cleanup_mock()
    configure_mock()

    assert client("sqs", region_name="local-us-east-1").list_queues()["QueueUrls"] == []


def test_configured_settings_reach_mock():
    config = MockConfig()
    config.init(account_id="123456789012", domain="example.test")
    sqs = config.get_mock("sqs", "local-us-east-1", MockSQS)

    url = sqs.create_queue(QueueName="orders")["QueueUrl"]
    assert url == "http://sqs.local-us-east-1.example.test/123456789012/orders"


def test_config_rejects_unknown_settings():
    with pytest.raises(ValueError, match="Unknown mock settings: mode"):
        MockConfig().init(mode="persistent")


def test_mock_defaults_come_from_config_settings():
    sqs = MockSQS(region_name="local-us-east-1")

    assert sqs.url_prefix == (
        f"http://sqs.local-us-east-1.{DEFAULT_SETTINGS['domain']}/{DEFAULT_SETTINGS['account_id']}/"
    )
    assert sqs.faults.client_marker == DEFAULT_SETTINGS["client_marker"]
    assert sqs.faults.service_marker == DEFAULT_SETTINGS["service_marker"]
