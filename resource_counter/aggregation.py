"""Aggregation driver: runs a counter once or fans it out over regions."""
from typing import TYPE_CHECKING, Any, List
import logging

from .config import CounterConfig
from .provider import ServiceProvider
from .reporter import ActivityReporter
from .types import AggregationMode
from .utils import RegionDiscoveryError, TransportError, UnsupportedCapability

if TYPE_CHECKING:
    from .counters.base_counter import BaseCounter

logger = logging.getLogger(__name__)


class AggregationDriver:
    """
    Runs counters against a provider in a fixed aggregation mode.

    In SINGLE_REGION mode a counter is called once for the configured region
    (empty meaning the session's region). In ALL_REGIONS mode it is called
    once per region of the counter's own region directory and the partial
    results are combined by the counter (sum or set union). Regions are
    visited in directory order and nothing already accumulated is rolled
    back when a later region fails.
    """

    def __init__(
        self,
        provider: ServiceProvider,
        reporter: ActivityReporter,
        mode: AggregationMode = AggregationMode.SINGLE_REGION,
        region: str = ''
    ):
        self.provider = provider
        self.reporter = reporter
        self.mode = mode
        self.region = region

    @classmethod
    def from_config(
        cls,
        provider: ServiceProvider,
        reporter: ActivityReporter,
        config: CounterConfig
    ) -> 'AggregationDriver':
        return cls(provider, reporter, mode=config.mode, region=config.region)

    def plan(self, counter: 'BaseCounter[Any]') -> List[str]:
        """
        Decide which regions a counter is run against.

        Returns:
            Region names; '' stands for the session's region
        """
        if counter.account_wide:
            return ['']

        if self.mode is AggregationMode.SINGLE_REGION:
            return counter.single_region_plan(self.provider, self.reporter, self.region)

        try:
            regions = counter.region_directory(self.provider)
        except RegionDiscoveryError as e:
            self.reporter.check_error(e)
            return []

        return [region.name for region in regions]

    def run(self, counter: 'BaseCounter[Any]') -> int:
        """
        Run one counter and return its aggregated count.

        Args:
            counter: The counter to run

        Returns:
            A non-negative count; partial if a tolerated error interrupted it
        """
        self.reporter.start(f"Retrieving {counter.label} counts")

        total = counter.empty()
        for region in self.plan(counter):
            try:
                handle = self.provider.capability_for(counter.resource_type, region)
            except UnsupportedCapability as e:
                self.reporter.check_error(e)
                break
            except TransportError as e:
                self.reporter.check_error(e)
                continue

            self.reporter.message('.')
            total = counter.combine(total, counter.partial(handle, self.reporter))

        result = counter.finalize(total)

        logger.info(
            f"Counted {result} {counter.label} resources",
            extra={'counter': counter.label, 'mode': self.mode.value, 'count': result}
        )
        self.reporter.end(f"OK ({result})")

        return result
