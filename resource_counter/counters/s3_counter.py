"""S3 bucket counter."""
from typing import List
import logging

from .base_counter import BaseCounter
from ..provider import S3Handle, ServiceProvider
from ..reporter import ActivityReporter
from ..types import Region, ResourceType
from ..utils import ResourceCounterError

logger = logging.getLogger(__name__)


class BucketCounter(BaseCounter[int]):
    """
    Counts S3 buckets.

    ListBuckets returns every bucket in the account from any region, so the
    counter makes exactly one call regardless of the aggregation mode.
    """

    resource_type = ResourceType.S3
    label = 'S3 bucket'
    column = '# of S3 Buckets'
    account_wide = True

    def region_directory(self, provider: ServiceProvider) -> List[Region]:
        return []

    def partial(self, handle: S3Handle, reporter: ActivityReporter) -> int:
        try:
            buckets = handle.list_buckets()
        except ResourceCounterError as e:
            reporter.check_error(e)
            return 0

        return len(buckets)
