"""Uniform consumption of paged AWS listing calls."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict
from botocore.exceptions import ClientError, BotoCoreError
import logging

from .type_defs import Paginator
from .utils import TransportError

logger = logging.getLogger(__name__)

# Receives one response page and whether it is the final one; returns
# False to stop requesting further pages.
PageHandler = Callable[[Dict[str, Any], bool], bool]


@dataclass
class PagedRequest:
    """
    A paged listing call waiting to be consumed.

    Attributes:
        operation: API operation name, used in error messages
        paginator: boto3 paginator for the operation
        token_key: Response key that carries the continuation token
        params: Request parameters passed to ``paginate``
    """
    operation: str
    paginator: Paginator
    token_key: str
    params: Dict[str, Any] = field(default_factory=dict)


def paginate(request: PagedRequest, page_handler: PageHandler) -> int:
    """
    Drain a paged listing call into ``page_handler``.

    Pages are handed over in the order AWS produces them. A page is the last
    one when its response carries no continuation token, so the handler sees
    ``is_last=True`` exactly once without the next page being fetched ahead
    of time. No further page is requested once the handler returns False.

    Args:
        request: The paged call to consume
        page_handler: Callback invoked once per page

    Returns:
        Number of pages handed to the handler

    Raises:
        TransportError: If fetching a page fails; the handler is not invoked
            for the failed page
    """
    try:
        pages = iter(request.paginator.paginate(**request.params))
    except (ClientError, BotoCoreError) as e:
        raise TransportError(request.operation, e) from e

    handled = 0
    while True:
        try:
            response = next(pages)
        except StopIteration:
            return handled
        except (ClientError, BotoCoreError) as e:
            raise TransportError(request.operation, e) from e

        is_last = not response.get(request.token_key)
        handled += 1

        if not page_handler(response, is_last):
            logger.debug(f"Stopped paging {request.operation} after {handled} page(s)")
            return handled
        if is_last:
            return handled
