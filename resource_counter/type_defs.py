"""Type definitions for the resource counter."""
from typing import TypedDict, Optional, Any, List, Protocol, runtime_checkable


@runtime_checkable
class BotoClient(Protocol):
    """Protocol for boto3 client objects."""

    def get_paginator(self, operation_name: str) -> Any:
        """Get a paginator for the specified operation."""
        ...


@runtime_checkable
class Paginator(Protocol):
    """Protocol for boto3 paginator objects."""

    def paginate(self, **kwargs: Any) -> Any:
        """Paginate through results."""
        ...


class EC2Filter(TypedDict):
    """A single EC2 describe filter."""
    Name: str
    Values: List[str]


class ContainerDefinition(TypedDict, total=False):
    """The part of an ECS container definition the counter reads."""
    name: str
    image: str


class TaskDefinition(TypedDict, total=False):
    """The part of an ECS task definition the counter reads."""
    taskDefinitionArn: str
    family: str
    containerDefinitions: List[ContainerDefinition]


class RegionInfo(TypedDict, total=False):
    """One entry of EC2 describe_regions."""
    RegionName: str
    Endpoint: str
    OptInStatus: Optional[str]
