"""Account identity lookup."""
import logging

from .provider import ServiceProvider
from .reporter import ActivityReporter
from .types import ResourceType
from .utils import ResourceCounterError

logger = logging.getLogger(__name__)

ACCOUNT_ID_COLUMN = 'Account ID'


def get_account_id(provider: ServiceProvider, reporter: ActivityReporter) -> str:
    """
    Get the AWS account ID of the session's credentials.

    Returns:
        The account ID, or '' if the lookup failed and the reporter let the
        run continue
    """
    reporter.start("Retrieving Account ID")

    try:
        account_id = provider.capability_for(ResourceType.STS).account_id()
    except ResourceCounterError as e:
        reporter.check_error(e)
        return ''

    reporter.end(f"OK ({account_id})")
    return account_id
