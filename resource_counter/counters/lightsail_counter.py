"""Lightsail instance counter."""
from typing import Any, Dict, List

from .base_counter import BaseCounter
from ..provider import LightsailHandle, ServiceProvider
from ..regions import discover_lightsail_regions
from ..reporter import ActivityReporter
from ..types import Region, ResourceType
from ..utils import RegionDiscoveryError


class LightsailCounter(BaseCounter[int]):
    """
    Counts Lightsail instances.

    Lightsail runs in fewer regions than EC2, so its own region list is the
    directory for both modes: a single-region run only counts when the run's
    region is one Lightsail serves.
    """

    resource_type = ResourceType.LIGHTSAIL
    label = 'Lightsail instance'
    column = '# of Lightsail Instances'

    def region_directory(self, provider: ServiceProvider) -> List[Region]:
        return discover_lightsail_regions(provider)

    def single_region_plan(self, provider: ServiceProvider, reporter: ActivityReporter, region: str) -> List[str]:
        try:
            lightsail_regions = discover_lightsail_regions(provider)
        except RegionDiscoveryError as e:
            reporter.check_error(e)
            return []

        current_region = region or provider.current_region
        if any(r.name == current_region for r in lightsail_regions):
            return [region]
        return []

    def partial(self, handle: LightsailHandle, reporter: ActivityReporter) -> int:
        count = 0

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            nonlocal count
            count += len(page.get('instances', []))
            return True

        self.consume(handle.instances, handle_page, reporter)
        return count
