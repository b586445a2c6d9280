from .base_counter import BaseCounter
from .ec2_counter import InstanceCounter, SpotCounter, VolumeCounter
from .ecs_counter import ContainerImageCounter
from .lambda_counter import FunctionCounter
from .rds_counter import DatabaseCounter
from .lightsail_counter import LightsailCounter
from .s3_counter import BucketCounter

# Report column order
ALL_COUNTERS = (
    InstanceCounter,
    SpotCounter,
    VolumeCounter,
    ContainerImageCounter,
    FunctionCounter,
    DatabaseCounter,
    LightsailCounter,
    BucketCounter,
)

__all__ = [
    'BaseCounter',
    'InstanceCounter',
    'SpotCounter',
    'VolumeCounter',
    'ContainerImageCounter',
    'FunctionCounter',
    'DatabaseCounter',
    'LightsailCounter',
    'BucketCounter',
    'ALL_COUNTERS',
]
