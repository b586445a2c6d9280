"""ECS container image counter."""
from typing import Any, Dict, Set
import logging

from .base_counter import BaseCounter
from ..provider import ECSHandle
from ..reporter import ActivityReporter
from ..types import ResourceType
from ..utils import ResourceCounterError

logger = logging.getLogger(__name__)


class ContainerImageCounter(BaseCounter[Set[str]]):
    """
    Counts unique container images referenced by ECS task definitions.

    Every task definition is described one at a time and the image of each
    of its container definitions goes into a set. Sets from different
    regions are unioned, so an image used in several regions counts once.
    """

    resource_type = ResourceType.ECS
    label = 'Unique container'
    column = '# of Unique Containers'

    def empty(self) -> Set[str]:
        return set()

    def combine(self, total: Set[str], part: Set[str]) -> Set[str]:
        total |= part
        return total

    def finalize(self, total: Set[str]) -> int:
        return len(total)

    def partial(self, handle: ECSHandle, reporter: ActivityReporter) -> Set[str]:
        images: Set[str] = set()

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            for task_definition_arn in page.get('taskDefinitionArns', []):
                try:
                    task_definition = handle.describe_task_definition(task_definition_arn)
                except ResourceCounterError as e:
                    logger.debug(f"Could not describe {task_definition_arn} in {handle.region}")
                    reporter.check_error(e)
                    # Give up on the rest of this region
                    return False

                if not task_definition:
                    continue

                for container in task_definition.get('containerDefinitions', []):
                    image = container.get('image')
                    if image:
                        images.add(image)
            return True

        self.consume(handle.task_definitions, handle_page, reporter)
        return images
