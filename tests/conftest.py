"""
Pytest configuration and shared fixtures
"""

import copy
from typing import Any

import pytest

from onchain_markets.infrastructure import http_client
from onchain_markets.registry import AssetRegistry, RegistryDocument
from tests.factories import REGISTRY_DOCUMENT


@pytest.fixture
def registry_document() -> dict[str, Any]:
    """A fresh copy of the test registry document, safe to mutate"""
    return copy.deepcopy(REGISTRY_DOCUMENT)


@pytest.fixture
def registry(registry_document) -> AssetRegistry:
    """Small hermetic registry covering the cross-exchange collision cases"""
    return AssetRegistry(RegistryDocument.model_validate(registry_document))


@pytest.fixture(autouse=True)
def reset_http_retries():
    """Keep the module-level retry limit from leaking between tests"""
    yield
    http_client.configure_retries(1)
