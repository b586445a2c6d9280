"""EC2 counters: on-demand instances, spot instances and attached EBS volumes."""
from typing import Any, Dict
import logging

from .base_counter import BaseCounter
from ..provider import EC2Handle
from ..reporter import ActivityReporter
from ..types import ResourceType

logger = logging.getLogger(__name__)

RUNNING_FILTER = {'Name': 'instance-state-name', 'Values': ['running']}
SPOT_FILTER = {'Name': 'instance-lifecycle', 'Values': ['spot']}


def _is_running(instance: Dict[str, Any]) -> bool:
    return instance.get('State', {}).get('Name') == 'running'


class InstanceCounter(BaseCounter[int]):
    """
    Counts running EC2 instances that are neither spot nor scheduled.

    Spot and scheduled instances carry an ``InstanceLifecycle``; regular
    instances have none. The running-state filter is sent to AWS and checked
    again on each instance.
    """

    resource_type = ResourceType.EC2
    label = 'EC2'
    column = '# of EC2 Instances'

    def matches(self, instance: Dict[str, Any]) -> bool:
        return instance.get('InstanceLifecycle') is None and _is_running(instance)

    def partial(self, handle: EC2Handle, reporter: ActivityReporter) -> int:
        count = 0

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            nonlocal count
            for reservation in page.get('Reservations', []):
                for instance in reservation.get('Instances', []):
                    if self.matches(instance):
                        count += 1
            return True

        self.consume(lambda: handle.instances(filters=[RUNNING_FILTER]), handle_page, reporter)
        return count


class SpotCounter(InstanceCounter):
    """Counts running spot instances."""

    label = 'Spot instance'
    column = '# of Spot Instances'

    def matches(self, instance: Dict[str, Any]) -> bool:
        return instance.get('InstanceLifecycle') == 'spot' and _is_running(instance)

    def partial(self, handle: EC2Handle, reporter: ActivityReporter) -> int:
        count = 0

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            nonlocal count
            for reservation in page.get('Reservations', []):
                count += sum(1 for instance in reservation.get('Instances', []) if self.matches(instance))
            return True

        self.consume(lambda: handle.instances(filters=[SPOT_FILTER, RUNNING_FILTER]), handle_page, reporter)
        return count


class VolumeCounter(BaseCounter[int]):
    """Counts EBS volumes attached to an instance."""

    resource_type = ResourceType.EC2
    label = 'EBS volume'
    column = '# of EBS Volumes'

    def partial(self, handle: EC2Handle, reporter: ActivityReporter) -> int:
        count = 0

        def handle_page(page: Dict[str, Any], is_last: bool) -> bool:
            nonlocal count
            for volume in page.get('Volumes', []):
                if volume.get('Attachments'):
                    count += 1
            return True

        self.consume(handle.volumes, handle_page, reporter)
        return count
