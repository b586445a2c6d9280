"""Lambda function counter."""
from typing import Any, Dict

from .base_counter import BaseCounter
from ..provider import LambdaHandle
from ..reporter import ActivityReporter
from ..types import ResourceType


class FunctionCounter(BaseCounter[int]):
    """Counts Lambda functions per region."""

    resource_type = ResourceType.LAMBDA
    label = 'Lambda function'
    column = '# of Lambda Functions'

    def partial(self, handle: LambdaHandle, reporter: ActivityReporter) -> int:
        count = 0

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            nonlocal count
            count += len(page.get('Functions', []))
            return not is_last

        self.consume(handle.functions, handle_page, reporter)
        return count
