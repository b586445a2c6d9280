"""Region directories: which regions a counter should visit."""
from typing import List
import logging

from .config import DEFAULT_REGION
from .provider import ServiceProvider
from .types import Region, ResourceType, ENABLED_OPT_IN_STATUSES
from .utils import RegionDiscoveryError, ResourceCounterError

logger = logging.getLogger(__name__)

OPT_IN_FILTER = [{'Name': 'opt-in-status', 'Values': list(ENABLED_OPT_IN_STATUSES)}]


def discover_regions(provider: ServiceProvider) -> List[Region]:
    """
    Get the EC2 regions enabled for this account.

    Args:
        provider: Capability provider for the run

    Returns:
        Enabled regions, in the order AWS lists them

    Raises:
        RegionDiscoveryError: If the regions cannot be listed
    """
    try:
        handle = provider.capability_for(ResourceType.EC2)
        response = handle.describe_regions(filters=OPT_IN_FILTER)
    except ResourceCounterError as e:
        raise RegionDiscoveryError('EC2', e) from e

    regions = [
        Region(name=info['RegionName'], opt_in_status=info.get('OptInStatus'))
        for info in response
    ]
    enabled = [region for region in regions if region.enabled]

    logger.debug(f"Discovered {len(enabled)} enabled EC2 regions (of {len(regions)} listed)")
    return enabled


def discover_lightsail_regions(provider: ServiceProvider) -> List[Region]:
    """
    Get the regions Lightsail serves.

    The lookup is pinned to DEFAULT_REGION because get_regions fails when it
    is sent to a region Lightsail does not support.

    Raises:
        RegionDiscoveryError: If the regions cannot be listed
    """
    try:
        handle = provider.capability_for(ResourceType.LIGHTSAIL, DEFAULT_REGION)
        response = handle.get_regions()
    except ResourceCounterError as e:
        raise RegionDiscoveryError('Lightsail', e) from e

    regions = [Region(name=info['name']) for info in response]

    logger.debug(f"Discovered {len(regions)} Lightsail regions")
    return regions
