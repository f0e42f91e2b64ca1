import boto3

from pysqsmock import config as mock_config
from pysqsmock.mocks import base_mock


def configure_mock(**settings):
    mock_config.config.init(**settings)


def cleanup_mock():
    mock_config.config.cleanup()


def client(service_name, region_name=None, **kwargs):
    if isinstance(region_name, str) and region_name.startswith("local"):
        if not base_mock.validate_region(region_name):
            raise RuntimeError(f"Region {region_name} not supported in local mock mode")
        if not mock_config.config.active:
            raise RuntimeError("Mock not configured. Call configure_mock() first.")

        if service_name == "sqs":
            from pysqsmock.mocks.application_integration.sqs import mock as sqs_mock
            return mock_config.config.get_mock(service_name, region_name, sqs_mock.MockSQS)

        raise NotImplementedError(f"Local Mock not implemented for {service_name}")

    return boto3.client(service_name, region_name=region_name, **kwargs)
