"""Unit tests for region discovery."""
import pytest

from resource_counter.config import DEFAULT_REGION
from resource_counter.regions import OPT_IN_FILTER, discover_lightsail_regions, discover_regions
from resource_counter.types import Region, ResourceType
from resource_counter.utils import RegionDiscoveryError


class TestDiscoverRegions:
    """Test cases for discover_regions."""

    def test_returns_enabled_regions_in_listed_order(self, make_client, make_provider, ec2_regions_response):
        client = make_client(responses={'describe_regions': ec2_regions_response})
        provider = make_provider({ResourceType.EC2: {'us-east-1': client}})

        regions = discover_regions(provider)

        assert [r.name for r in regions] == ['us-east-1', 'us-east-2', 'af-south-1']
        client.describe_regions.assert_called_once_with(Filters=OPT_IN_FILTER)

    def test_filters_regions_not_opted_in(self, make_client, make_provider):
        response = {
            'Regions': [
                {'RegionName': 'eu-south-1', 'OptInStatus': 'not-opted-in'},
                {'RegionName': 'eu-west-1', 'OptInStatus': 'opt-in-not-required'},
            ]
        }
        provider = make_provider({ResourceType.EC2: {'us-east-1': make_client(responses={'describe_regions': response})}})

        assert discover_regions(provider) == [Region('eu-west-1', 'opt-in-not-required')]

    def test_uses_session_region(self, make_client, make_provider, ec2_regions_response):
        client = make_client(responses={'describe_regions': ec2_regions_response})
        provider = make_provider({ResourceType.EC2: {'eu-west-1': client}}, current_region='eu-west-1')

        discover_regions(provider)

        assert provider.requested == [(ResourceType.EC2, '')]

    def test_listing_failure(self, make_client, make_provider, make_client_error):
        error = make_client_error('UnauthorizedOperation', 'You are not authorized', 'DescribeRegions')
        provider = make_provider({ResourceType.EC2: {'us-east-1': make_client(responses={'describe_regions': error})}})

        with pytest.raises(RegionDiscoveryError) as exc_info:
            discover_regions(provider)

        assert exc_info.value.directory == 'EC2'
        assert exc_info.value.cause.cause is error

    def test_unsupported_capability_is_a_discovery_failure(self, make_provider):
        provider = make_provider({})

        with pytest.raises(RegionDiscoveryError):
            discover_regions(provider)


class TestDiscoverLightsailRegions:
    """Test cases for discover_lightsail_regions."""

    def test_lists_lightsail_regions_from_default_region(self, make_client, make_provider):
        client = make_client(responses={'get_regions': {'regions': [{'name': 'us-east-1'}, {'name': 'eu-west-1'}]}})
        provider = make_provider({ResourceType.LIGHTSAIL: {DEFAULT_REGION: client}}, current_region='sa-east-1')

        regions = discover_lightsail_regions(provider)

        assert [r.name for r in regions] == ['us-east-1', 'eu-west-1']
        assert all(r.enabled for r in regions)
        assert provider.requested == [(ResourceType.LIGHTSAIL, DEFAULT_REGION)]

    def test_listing_failure(self, make_client, make_provider, make_client_error):
        client = make_client(responses={'get_regions': make_client_error('InternalFailure')})
        provider = make_provider({ResourceType.LIGHTSAIL: {DEFAULT_REGION: client}})

        with pytest.raises(RegionDiscoveryError) as exc_info:
            discover_lightsail_regions(provider)

        assert exc_info.value.directory == 'Lightsail'
