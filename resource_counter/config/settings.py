"""Run configuration settings."""
from dataclasses import dataclass, fields, replace
from typing import Optional, Dict, Any
import os
import json
import logging

from ..types import AggregationMode

logger = logging.getLogger(__name__)

# Used when neither the command line nor the profile names a region
DEFAULT_REGION = 'us-east-1'

DEFAULT_OUTPUT_FILE = 'resources.csv'
DEFAULT_CONFIG_FILE = 'resource-counter-config.json'

ENV_PREFIX = 'RESOURCE_COUNTER_'


def _env_int(name: str) -> Optional[int]:
    """Read a positive integer from the environment; bad values are logged and ignored."""
    value = os.getenv(name)
    if not value:
        return None
    try:
        number = int(value)
    except ValueError:
        logger.error(f"Ignoring {name}={value!r}: not an integer")
        return None
    if number < 1:
        logger.error(f"Ignoring {name}={value!r}: must be at least 1")
        return None
    return number


@dataclass(frozen=True)
class CounterConfig:
    """Immutable configuration for one run of the resource counter."""

    # Session settings
    profile: Optional[str] = None
    region: str = ''

    # Output settings
    output_file: Optional[str] = None
    no_output: bool = False
    trace_file: Optional[str] = None

    # Retry settings (handed to botocore)
    max_retries: int = 3

    # Logging
    log_level: str = 'WARNING'
    log_format: str = 'text'  # 'text' or 'json'

    @property
    def all_regions(self) -> bool:
        """No explicit region means every region enabled for the account."""
        return not self.region

    @property
    def mode(self) -> AggregationMode:
        return AggregationMode.from_flag(self.all_regions)

    @property
    def effective_output_file(self) -> Optional[str]:
        """Return the CSV path to write, or None when output is disabled."""
        if self.no_output:
            return None
        return self.output_file or DEFAULT_OUTPUT_FILE

    def with_overrides(self, **overrides: Any) -> 'CounterConfig':
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CounterConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_file(cls, config_path: str) -> 'CounterConfig':
        """Load configuration from a JSON file."""
        try:
            with open(config_path, 'r') as f:
                config_data = json.load(f)
            return cls.from_dict(config_data)
        except FileNotFoundError:
            logger.info(f"Config file {config_path} not found, using defaults")
            return cls()
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading config file: {e}, using defaults")
            return cls()

    @classmethod
    def from_env(cls, base: Optional['CounterConfig'] = None) -> 'CounterConfig':
        """Apply environment variable overrides on top of ``base`` (or the defaults)."""
        config = base or cls()

        return config.with_overrides(
            profile=os.getenv(f'{ENV_PREFIX}PROFILE'),
            region=os.getenv(f'{ENV_PREFIX}REGION'),
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL'),
            max_retries=_env_int(f'{ENV_PREFIX}MAX_RETRIES'),
        )


def load_config(config_path: Optional[str] = None) -> CounterConfig:
    """
    Build the run configuration from a file (if present) and the environment.

    Args:
        config_path: Explicit JSON config path; falls back to
            ``RESOURCE_COUNTER_CONFIG`` and then the default file name

    Returns:
        The resulting configuration
    """
    path = config_path or os.getenv(f'{ENV_PREFIX}CONFIG', DEFAULT_CONFIG_FILE)
    if os.path.exists(path):
        base = CounterConfig.from_file(path)
    else:
        base = CounterConfig()
    return CounterConfig.from_env(base)
