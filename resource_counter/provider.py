"""Service capability provider: region-scoped handles over boto3 clients."""
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, List, Optional, Type
import boto3
from botocore.config import Config
from botocore.exceptions import ClientError, BotoCoreError
import logging

from .config import CounterConfig, DEFAULT_REGION
from .pagination import PagedRequest
from .types import ResourceType
from .type_defs import BotoClient, EC2Filter, RegionInfo, TaskDefinition
from .utils import TransportError, UnsupportedCapability

logger = logging.getLogger(__name__)


class CapabilityHandle:
    """Base class for region-scoped handles wrapping one boto3 client."""

    resource_type: ResourceType

    def __init__(self, client: BotoClient, region: str):
        self.client = client
        self.region = region

    def _paged(self, operation: str, token_key: str, **params: Any) -> PagedRequest:
        return PagedRequest(
            operation=operation,
            paginator=self.client.get_paginator(operation),
            token_key=token_key,
            params=params
        )

    def _call(self, operation: str, **params: Any) -> Dict[str, Any]:
        """Invoke a single (non-paged) operation, wrapping failures in TransportError."""
        try:
            return getattr(self.client, operation)(**params)
        except (ClientError, BotoCoreError) as e:
            raise TransportError(operation, e) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(region={self.region!r})"


class EC2Handle(CapabilityHandle):
    resource_type = ResourceType.EC2

    def describe_regions(self, filters: Optional[List[EC2Filter]] = None) -> List[RegionInfo]:
        params = {'Filters': filters} if filters else {}
        return self._call('describe_regions', **params).get('Regions', [])

    def instances(self, filters: Optional[List[EC2Filter]] = None) -> PagedRequest:
        params = {'Filters': filters} if filters else {}
        return self._paged('describe_instances', 'NextToken', **params)

    def volumes(self) -> PagedRequest:
        return self._paged('describe_volumes', 'NextToken')


class RDSHandle(CapabilityHandle):
    resource_type = ResourceType.RDS

    def db_instances(self) -> PagedRequest:
        return self._paged('describe_db_instances', 'Marker')


class S3Handle(CapabilityHandle):
    resource_type = ResourceType.S3

    def list_buckets(self) -> List[Dict[str, Any]]:
        return self._call('list_buckets').get('Buckets', [])


class LambdaHandle(CapabilityHandle):
    resource_type = ResourceType.LAMBDA

    def functions(self) -> PagedRequest:
        return self._paged('list_functions', 'NextMarker')


class ECSHandle(CapabilityHandle):
    resource_type = ResourceType.ECS

    def task_definitions(self) -> PagedRequest:
        return self._paged('list_task_definitions', 'nextToken')

    def describe_task_definition(self, task_definition_arn: str) -> Optional[TaskDefinition]:
        response = self._call('describe_task_definition', taskDefinition=task_definition_arn)
        return response.get('taskDefinition')


class LightsailHandle(CapabilityHandle):
    resource_type = ResourceType.LIGHTSAIL

    def get_regions(self) -> List[Dict[str, Any]]:
        return self._call('get_regions').get('regions', [])

    def instances(self) -> PagedRequest:
        return self._paged('get_instances', 'nextPageToken')


class STSHandle(CapabilityHandle):
    resource_type = ResourceType.STS

    def account_id(self) -> str:
        return self._call('get_caller_identity')['Account']


HANDLE_TYPES: Dict[ResourceType, Type[CapabilityHandle]] = {
    handle.resource_type: handle
    for handle in (EC2Handle, RDSHandle, S3Handle, LambdaHandle, ECSHandle, LightsailHandle, STSHandle)
}


class ServiceProvider(ABC):
    """
    Hands out region-scoped capability handles.

    The set of resource types a provider can serve is explicit: asking for
    anything outside ``supported`` raises UnsupportedCapability, so a missing
    capability never looks like an empty listing.
    """

    supported: FrozenSet[ResourceType] = frozenset(ResourceType)

    def supports(self, resource_type: ResourceType) -> bool:
        return resource_type in self.supported

    def capability_for(self, resource_type: ResourceType, region: str = '') -> CapabilityHandle:
        """
        Return a fresh handle for ``resource_type``.

        Args:
            resource_type: Which family of operations is needed
            region: Region to pin the handle to; empty means the session's region

        Returns:
            A new handle; handles are never cached or shared

        Raises:
            UnsupportedCapability: If this provider does not serve the resource type
            TransportError: If the client cannot be built (e.g. a malformed region)
        """
        if not self.supports(resource_type):
            raise UnsupportedCapability(resource_type)
        try:
            return self._create_handle(resource_type, region)
        except BotoCoreError as e:
            raise TransportError(f"{resource_type.service_name} client", e) from e

    @property
    @abstractmethod
    def current_region(self) -> str:
        """Region the underlying session resolved to."""
        pass

    @abstractmethod
    def _create_handle(self, resource_type: ResourceType, region: str) -> CapabilityHandle:
        pass


class AWSServiceProvider(ServiceProvider):
    """Provider backed by a boto3 session."""

    def __init__(self, session: boto3.Session, max_retries: int = 3):
        self.session = session
        # botocore is the only retry layer; max_retries counts every attempt
        self.client_config = Config(retries={'total_max_attempts': max_retries, 'mode': 'standard'})

    @classmethod
    def from_config(cls, config: CounterConfig) -> 'AWSServiceProvider':
        """
        Create the session for a run.

        The region comes from the command line, then the profile, then
        DEFAULT_REGION.
        """
        session = boto3.Session(profile_name=config.profile, region_name=config.region or None)
        if not session.region_name:
            logger.info(f"No region configured for profile, defaulting to {DEFAULT_REGION}")
            session = boto3.Session(profile_name=config.profile, region_name=DEFAULT_REGION)
        return cls(session, max_retries=config.max_retries)

    @property
    def current_region(self) -> str:
        return self.session.region_name or DEFAULT_REGION

    @property
    def profile_name(self) -> str:
        return self.session.profile_name

    def _create_handle(self, resource_type: ResourceType, region: str) -> CapabilityHandle:
        if region:
            client = self.session.client(resource_type.service_name, region_name=region, config=self.client_config)
        else:
            client = self.session.client(resource_type.service_name, config=self.client_config)
        return HANDLE_TYPES[resource_type](client, region or self.current_region)
