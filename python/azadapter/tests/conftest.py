from __future__ import annotations

from typing import Callable

import pytest

from azadapter.models.api_keys.azure import ClientAuth
from azadapter.models.cluster import CloudProfileConfig, ClusterContext, DomainCount
from azadapter.models.infrastructure import (
    InfrastructureConfig,
    InfrastructureResource,
    NetworkConfig,
    VNet,
)

TEST_CIDR = "10.1.0.0/16"
TEST_SERVICE_ENDPOINT = "Microsoft.Test"
REGION = "eu-west-1"
COUNT_FAULT_DOMAINS = 1
COUNT_UPDATE_DOMAINS = 2


def _make_config(
    vnet: VNet | None = None, zoned: bool = True, service_endpoints: list[str] | None = None
) -> InfrastructureConfig:
    return InfrastructureConfig(
        networks=NetworkConfig(
            vnet=vnet if vnet is not None else VNet(name="vnet", cidr=TEST_CIDR),
            workers=TEST_CIDR,
            service_endpoints=(
                [TEST_SERVICE_ENDPOINT] if service_endpoints is None else service_endpoints
            ),
        ),
        zoned=zoned,
    )


@pytest.fixture
def infra() -> InfrastructureResource:
    return InfrastructureResource(namespace="foo", name="bar", region=REGION)


@pytest.fixture
def client_auth() -> ClientAuth:
    return ClientAuth(
        tenant_id="tenant_id",
        client_secret="client_secret",
        client_id="client_id",
        subscription_id="subscription_id",
    )


@pytest.fixture
def cluster() -> ClusterContext:
    return ClusterContext(
        cloud_profile_config=CloudProfileConfig(
            count_fault_domains=[DomainCount(region=REGION, count=COUNT_FAULT_DOMAINS)],
            count_update_domains=[
                DomainCount(region=REGION, count=COUNT_UPDATE_DOMAINS)
            ],
        )
    )


@pytest.fixture
def make_config() -> Callable[..., InfrastructureConfig]:
    return _make_config


@pytest.fixture
def config() -> InfrastructureConfig:
    return _make_config()
