"""Logging configuration for the resource counter."""
import logging
import logging.config
import json
from typing import Dict, Any


def setup_logging(log_level: str = 'WARNING', log_format: str = 'text') -> None:
    """
    Set up logging configuration.

    Logs go to stderr so they never interleave with the progress line the
    terminal reporter writes.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format for logs ('text' or 'json')
    """
    config: Dict[str, Any] = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'text': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'json': {
                'class': 'resource_counter.logger.JSONFormatter'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': log_level,
                'formatter': log_format,
                'stream': 'ext://sys.stderr'
            }
        },
        'loggers': {
            'resource_counter': {
                'level': log_level,
                'handlers': ['console'],
                'propagate': False
            },
            'boto3': {
                'level': 'WARNING',
                'handlers': ['console'],
                'propagate': False
            },
            'botocore': {
                'level': 'WARNING',
                'handlers': ['console'],
                'propagate': False
            },
            'urllib3': {
                'level': 'WARNING',
                'handlers': ['console'],
                'propagate': False
            }
        },
        'root': {
            'level': log_level,
            'handlers': ['console']
        }
    }

    logging.config.dictConfig(config)


def enable_trace(trace_file: str) -> logging.Handler:
    """
    Record every AWS call (botocore debug output) into a trace file.

    Each run overwrites the previous trace.

    Args:
        trace_file: Path of the trace file

    Returns:
        The attached handler, so callers can close it when done
    """
    handler = logging.FileHandler(trace_file, mode='w')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(message)s'))

    botocore_logger = logging.getLogger('botocore')
    botocore_logger.setLevel(logging.DEBUG)
    botocore_logger.addHandler(handler)

    return handler


# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Counting runs attach ``counter``, ``mode`` and ``count`` through
    ``extra=``; those keys are copied to the top level of the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        )

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)
