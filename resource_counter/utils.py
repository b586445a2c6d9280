"""Utility functions and error types for the resource counter."""
import functools
from typing import Any, Optional, Set
import boto3
from botocore.exceptions import ClientError, NoCredentialsError, ProfileNotFound
import logging

logger = logging.getLogger(__name__)

ACCESS_DENIED_CODES = ('AccessDeniedException', 'UnauthorizedOperation', 'AccessDenied')
UNSUPPORTED_REGION_CODES = ('InvalidClientTokenId', 'UnrecognizedClientException')


class ResourceCounterError(Exception):
    """Base class for errors raised by the counting engine."""
    pass


class TransportError(ResourceCounterError):
    """Raised when a listing or describe call against AWS fails."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class RegionDiscoveryError(ResourceCounterError):
    """Raised when the list of regions cannot be obtained."""

    def __init__(self, directory: str, cause: Exception):
        self.directory = directory
        self.cause = cause
        super().__init__(f"Unable to get a list of valid {directory} regions: {cause}")


class UnsupportedCapability(ResourceCounterError):
    """Raised when a provider has no handle for the requested resource type."""

    def __init__(self, resource_type: Any):
        self.resource_type = resource_type
        name = getattr(resource_type, 'name', resource_type)
        super().__init__(f"Provider does not support {name} operations")


class ResultTableFinalizedError(ResourceCounterError):
    """Raised when a finalized result table is modified."""
    pass


def _root_cause(error: Exception) -> Exception:
    """Unwrap engine errors down to the exception that triggered them."""
    while isinstance(error, (TransportError, RegionDiscoveryError)):
        error = error.cause
    return error


def error_code(error: Exception) -> Optional[str]:
    """Return the AWS error code carried by an error, if any."""
    cause = _root_cause(error)
    if isinstance(cause, ClientError):
        return cause.response.get('Error', {}).get('Code')
    return None


def describe_aws_error(error: Exception) -> str:
    """
    Turn an error into a short message suitable for the terminal.

    Args:
        error: The exception that occurred

    Returns:
        A single line describing the error
    """
    cause = _root_cause(error)

    if isinstance(cause, (NoCredentialsError, ProfileNotFound)):
        return "Either the profile does not exist, is misspelled or credentials are not stored there."

    if isinstance(cause, ClientError):
        code = error_code(cause) or 'Unknown'
        message = cause.response.get('Error', {}).get('Message', '') or str(cause)
        first_line = message.split('\n')[0]

        if code in ACCESS_DENIED_CODES:
            return first_line
        elif code in UNSUPPORTED_REGION_CODES:
            return "The region is not supported for this account."
        else:
            return f"{code}: {first_line}"

    return str(error)


@functools.lru_cache(maxsize=1)
def known_region_names() -> Set[str]:
    """Return every region name botocore knows about, across all partitions."""
    session = boto3.session.Session()
    names: Set[str] = set()
    for partition in session.get_available_partitions():
        names.update(session.get_available_regions('ec2', partition_name=partition))
    return names


def is_valid_region_name(region_name: str) -> bool:
    return region_name in known_region_names()
