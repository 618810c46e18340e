"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from datazone_demo.service import DataZoneService

DOMAIN_ID = "dzd_test123"


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors with a given error code."""

    def _make(code: str, operation: str = "GetAssetType") -> ClientError:
        return ClientError(
            {"Error": {"Code": code, "Message": f"{code} raised by stub"}},
            operation,
        )

    return _make


@pytest.fixture
def datazone_client():
    """Stub DataZone client with the boto3 method surface."""
    client = Mock()
    client.list_projects.return_value = {
        "items": [
            {"id": "prj-consumer", "name": "Consumer-Project"},
            {"id": "prj-producer", "name": "Producer-Project"},
        ]
    }
    client.get_asset_type.return_value = {
        "domainId": DOMAIN_ID,
        "name": "JsonAssetType",
        "revision": "1",
    }
    client.create_asset.return_value = {"id": "asset-new", "name": "TestDepartmentAsset"}
    client.create_asset_revision.return_value = {"id": "asset-new", "revision": "2"}
    client.post_lineage_event.return_value = {"ResponseMetadata": {"HTTPStatusCode": 200}}
    return client


@pytest.fixture
def service(datazone_client):
    """Service wrapper bound to the stub client."""
    return DataZoneService(datazone_client, DOMAIN_ID)
