"""RDS instance counter."""
from typing import Any, Dict

from .base_counter import BaseCounter
from ..provider import RDSHandle
from ..reporter import ActivityReporter
from ..types import ResourceType


class DatabaseCounter(BaseCounter[int]):
    """Counts every RDS DB instance, whatever its status."""

    resource_type = ResourceType.RDS
    label = 'RDS instance'
    column = '# of RDS Instances'

    def partial(self, handle: RDSHandle, reporter: ActivityReporter) -> int:
        count = 0

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            nonlocal count
            count += len(page.get('DBInstances', []))
            return not is_last

        self.consume(handle.db_instances, handle_page, reporter)
        return count
