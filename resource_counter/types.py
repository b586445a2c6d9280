from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Opt-in states for regions that an account can actually use
ENABLED_OPT_IN_STATUSES = ('opt-in-not-required', 'opted-in')


class ResourceType(Enum):
    """Resource families the provider can hand out capabilities for."""
    EC2 = 'ec2'
    RDS = 'rds'
    S3 = 's3'
    LAMBDA = 'lambda'
    ECS = 'ecs'
    LIGHTSAIL = 'lightsail'
    STS = 'sts'

    @property
    def service_name(self) -> str:
        """Return the boto3 service name backing this resource type."""
        return self.value


class AggregationMode(Enum):
    """How a counter is run: once, or fanned out over every region."""
    SINGLE_REGION = 'single-region'
    ALL_REGIONS = 'all-regions'

    @classmethod
    def from_flag(cls, all_regions: bool) -> 'AggregationMode':
        return cls.ALL_REGIONS if all_regions else cls.SINGLE_REGION


@dataclass(frozen=True)
class Region:
    name: str
    opt_in_status: Optional[str] = None

    @property
    def enabled(self) -> bool:
        """Regions without an opt-in status (e.g. Lightsail regions) are usable."""
        return self.opt_in_status is None or self.opt_in_status in ENABLED_OPT_IN_STATUSES

    def __str__(self) -> str:
        return self.name
