"""Base counter class for AWS resource types."""
from abc import ABC, abstractmethod
from typing import Any, Generic, List, TypeVar
import logging

from ..aggregation import AggregationDriver
from ..pagination import PagedRequest, PageHandler, paginate
from ..provider import CapabilityHandle, ServiceProvider
from ..regions import discover_regions
from ..reporter import ActivityReporter
from ..types import AggregationMode, Region, ResourceType
from ..utils import ResourceCounterError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseCounter(ABC, Generic[T]):
    """
    Base class for resource counters.

    A counter knows how to produce a partial result for one region handle
    and how partial results combine. The default combination is integer
    addition; subclasses that deduplicate override ``empty``, ``combine``
    and ``finalize``.
    """

    resource_type: ResourceType
    label: str
    column: str

    # Account-wide counters make one call no matter the aggregation mode
    account_wide: bool = False

    def empty(self) -> T:
        return 0  # type: ignore[return-value]

    def combine(self, total: T, part: T) -> T:
        return total + part  # type: ignore[operator]

    def finalize(self, total: T) -> int:
        return int(total)  # type: ignore[call-overload]

    @abstractmethod
    def partial(self, handle: CapabilityHandle, reporter: ActivityReporter) -> T:
        """
        Count resources behind a single region handle.

        Errors are passed to the reporter; if control comes back the value
        accumulated so far is returned.
        """
        pass

    def region_directory(self, provider: ServiceProvider) -> List[Region]:
        """Regions visited in ALL_REGIONS mode."""
        return discover_regions(provider)

    def single_region_plan(self, provider: ServiceProvider, reporter: ActivityReporter, region: str) -> List[str]:
        """Regions visited in SINGLE_REGION mode."""
        return [region]

    def count(self, provider: ServiceProvider, reporter: ActivityReporter, all_regions: bool = False) -> int:
        """
        Count this resource type for the session's region or every region.

        Args:
            provider: Capability provider
            reporter: Progress and error reporter
            all_regions: Fan out over the region directory when True

        Returns:
            The aggregated count
        """
        driver = AggregationDriver(provider, reporter, AggregationMode.from_flag(all_regions))
        return driver.run(self)

    def consume(self, request_factory: Any, page_handler: PageHandler, reporter: ActivityReporter) -> None:
        """
        Page through ``request_factory()`` and hand failures to the reporter.

        Args:
            request_factory: Zero-argument callable returning a PagedRequest
            page_handler: Receives each page and whether it is the last
            reporter: Reporter that decides what a failure means
        """
        try:
            request: PagedRequest = request_factory()
            paginate(request, page_handler)
        except ResourceCounterError as e:
            logger.debug(f"{self.label} listing failed: {e}")
            reporter.check_error(e)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
