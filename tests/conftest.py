"""Pytest configuration and fixtures."""
import pytest
from unittest.mock import MagicMock
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import ClientError

from resource_counter.provider import HANDLE_TYPES, CapabilityHandle, ServiceProvider
from resource_counter.reporter import RecordingReporter
from resource_counter.types import ResourceType


class FakeServiceProvider(ServiceProvider):
    """
    Provider backed by canned boto3-like clients.

    ``clients`` maps a resource type to a map of region name to client. Only
    the resource types present are supported.
    """

    def __init__(self, clients: Dict[ResourceType, Dict[str, Any]], current_region: str = 'us-east-1'):
        self.clients = clients
        self.supported = frozenset(clients)
        self._current_region = current_region
        self.requested: List[Tuple[ResourceType, str]] = []

    @property
    def current_region(self) -> str:
        return self._current_region

    def _create_handle(self, resource_type: ResourceType, region: str) -> CapabilityHandle:
        self.requested.append((resource_type, region))
        resolved = region or self._current_region
        return HANDLE_TYPES[resource_type](self.clients[resource_type][resolved], resolved)


def build_client(
    pages: Optional[Dict[str, Any]] = None,
    responses: Optional[Dict[str, Any]] = None
) -> MagicMock:
    """
    Create a mock boto3 client.

    Args:
        pages: Operation name -> list of response pages (or an exception to raise)
        responses: Operation name -> response dict, exception, or callable

    Returns:
        A MagicMock behaving like the client
    """
    pages = pages or {}
    responses = responses or {}
    client = MagicMock()
    paginators: Dict[str, MagicMock] = {}

    def get_paginator(operation: str) -> MagicMock:
        if operation not in paginators:
            paginator = MagicMock()
            value = pages.get(operation, [])
            if isinstance(value, Exception):
                paginator.paginate.side_effect = value
            else:
                paginator.paginate.return_value = value
            paginators[operation] = paginator
        return paginators[operation]

    client.get_paginator.side_effect = get_paginator
    client.paginators = paginators

    for operation, value in responses.items():
        method = getattr(client, operation)
        if isinstance(value, Exception) or callable(value):
            method.side_effect = value
        else:
            method.return_value = value

    return client


def client_error(code: str, message: str = 'Something went wrong', operation: str = 'TestOperation') -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': message}}, operation)


@pytest.fixture
def make_client():
    """Factory for mock boto3 clients."""
    return build_client


@pytest.fixture
def make_provider():
    """Factory for fake capability providers."""
    return FakeServiceProvider


@pytest.fixture
def make_client_error():
    return client_error


@pytest.fixture
def reporter():
    """A tolerant reporter that records everything."""
    return RecordingReporter()


@pytest.fixture
def ec2_regions_response():
    """Enabled EC2 regions, as describe_regions returns them."""
    return {
        'Regions': [
            {'RegionName': 'us-east-1', 'OptInStatus': 'opt-in-not-required'},
            {'RegionName': 'us-east-2', 'OptInStatus': 'opt-in-not-required'},
            {'RegionName': 'af-south-1', 'OptInStatus': 'opted-in'},
        ]
    }


@pytest.fixture
def instance_pages():
    """describe_instances pages per region."""
    return {
        # Two pages: 1 running, then running + running spot; stopped + running
        'us-east-1': [
            {
                'Reservations': [
                    {'Instances': [{'State': {'Name': 'running'}}]},
                    {'Instances': [
                        {'State': {'Name': 'running'}},
                        {'InstanceLifecycle': 'spot', 'State': {'Name': 'running'}},
                    ]},
                ],
                'NextToken': 'page-2'
            },
            {
                'Reservations': [
                    {'Instances': [
                        {'State': {'Name': 'stopped'}},
                        {'State': {'Name': 'running'}},
                    ]},
                ]
            },
        ],
        # One page: 4 regular running, 1 scheduled, 2 stopped, 1 stopped spot, 1 running spot
        'us-east-2': [
            {
                'Reservations': [
                    {'Instances': [
                        {'State': {'Name': 'stopped'}},
                        {'InstanceLifecycle': 'scheduled', 'State': {'Name': 'running'}},
                        {'State': {'Name': 'running'}},
                    ]},
                    {'Instances': [
                        {'State': {'Name': 'running'}},
                        {'State': {'Name': 'running'}},
                        {'State': {'Name': 'stopped'}},
                    ]},
                    {'Instances': [
                        {'State': {'Name': 'running'}},
                        {'InstanceLifecycle': 'spot', 'State': {'Name': 'stopped'}},
                        {'InstanceLifecycle': 'spot', 'State': {'Name': 'running'}},
                    ]},
                ]
            },
        ],
        'af-south-1': [{}],
    }


@pytest.fixture
def ec2_provider(make_client, make_provider, ec2_regions_response, instance_pages):
    """Provider whose EC2 clients serve ``instance_pages`` and the region list."""
    clients = {
        region: make_client(
            pages={'describe_instances': pages},
            responses={'describe_regions': ec2_regions_response}
        )
        for region, pages in instance_pages.items()
    }
    return make_provider({ResourceType.EC2: clients})
