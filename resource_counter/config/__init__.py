"""Configuration module for the resource counter."""
from .settings import (
    CounterConfig,
    load_config,
    DEFAULT_REGION,
    DEFAULT_OUTPUT_FILE,
)

__all__ = [
    'CounterConfig',
    'load_config',
    'DEFAULT_REGION',
    'DEFAULT_OUTPUT_FILE',
]
