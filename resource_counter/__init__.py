"""Count the compute, storage and network resources of an AWS account."""

__version__ = '0.2.0'
