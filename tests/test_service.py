"""Unit tests for the DataZone service wrapper."""

import io
import json

import pytest
from botocore.exceptions import ClientError

from datazone_demo.exceptions import AssetTypeNotFoundError, ProjectNotFoundError
from datazone_demo.models import FormInput


@pytest.fixture
def department_form():
    return FormInput(
        form_name="DepartmentMetadataForm",
        type_identifier="DepartmentMetaDataForm",
    )


class TestProjects:
    """Project listing and name resolution."""

    def test_list_projects_passes_domain(self, service, datazone_client):
        response = service.list_projects()

        assert response["items"][0]["id"] == "prj-consumer"
        datazone_client.list_projects.assert_called_once_with(
            domainIdentifier=service.domain_identifier
        )

    def test_get_project_id_matches_case_insensitively(self, service):
        assert service.get_project_id("producer-project") == "prj-producer"

    def test_get_project_id_returns_none_without_match(self, service):
        assert service.get_project_id("missing-project") is None

    def test_get_project_id_requires_exact_name(self, service):
        assert service.get_project_id("producer") is None

    def test_get_project_id_returns_first_match(self, service, datazone_client):
        datazone_client.list_projects.return_value = {
            "items": [
                {"id": "prj-1", "name": "Shared"},
                {"id": "prj-2", "name": "SHARED"},
            ]
        }

        assert service.get_project_id("shared") == "prj-1"

    def test_list_projects_propagates_remote_errors(
        self, service, datazone_client, client_error
    ):
        datazone_client.list_projects.side_effect = client_error(
            "AccessDeniedException", "ListProjects"
        )

        with pytest.raises(ClientError):
            service.list_projects()


class TestAssetTypes:
    """Asset type lookup and existence checks."""

    def test_asset_type_exists_true_on_success(self, service, datazone_client):
        assert service.asset_type_exists("JsonAssetType") is True
        datazone_client.get_asset_type.assert_called_once_with(
            domainIdentifier=service.domain_identifier,
            identifier="JsonAssetType",
        )

    def test_asset_type_exists_false_on_not_found(
        self, service, datazone_client, client_error
    ):
        datazone_client.get_asset_type.side_effect = client_error(
            "ResourceNotFoundException"
        )

        assert service.asset_type_exists("MissingType") is False

    def test_asset_type_exists_propagates_other_errors(
        self, service, datazone_client, client_error
    ):
        error = client_error("ThrottlingException")
        datazone_client.get_asset_type.side_effect = error

        with pytest.raises(ClientError) as exc_info:
            service.asset_type_exists("JsonAssetType")

        assert exc_info.value is error

    def test_get_asset_type_id_returns_type_name(self, service):
        assert service.get_asset_type_id("jsonassettype") == "JsonAssetType"

    def test_get_asset_type_id_none_when_missing(
        self, service, datazone_client, client_error
    ):
        datazone_client.get_asset_type.side_effect = client_error(
            "ResourceNotFoundException"
        )

        assert service.get_asset_type_id("MissingType") is None


class TestAssets:
    """Asset lookup, creation and revision."""

    def test_get_asset_returns_response(self, service, datazone_client):
        datazone_client.get_asset.return_value = {"id": "c0vdcl6vwvjr4y", "name": "Department1"}

        response = service.get_asset("c0vdcl6vwvjr4y")

        assert response["name"] == "Department1"
        datazone_client.get_asset.assert_called_once_with(
            domainIdentifier=service.domain_identifier,
            identifier="c0vdcl6vwvjr4y",
        )

    def test_create_asset_builds_request(self, service, datazone_client, department_form):
        response = service.create_asset(
            "TestDepartmentAsset",
            "JsonAssetType",
            "producer-project",
            [],
            [department_form],
        )

        assert response["id"] == "asset-new"
        kwargs = datazone_client.create_asset.call_args[1]
        assert kwargs["domainIdentifier"] == service.domain_identifier
        assert kwargs["name"] == "TestDepartmentAsset"
        assert kwargs["owningProjectIdentifier"] == "prj-producer"
        assert kwargs["typeIdentifier"] == "JsonAssetType"
        assert kwargs["description"] == "Test asset creation: TestDepartmentAsset"
        assert kwargs["formsInput"] == [
            {
                "formName": "DepartmentMetadataForm",
                "typeIdentifier": "DepartmentMetaDataForm",
            }
        ]

    def test_create_asset_omits_empty_glossary_terms(
        self, service, datazone_client, department_form
    ):
        service.create_asset(
            "TestDepartmentAsset", "JsonAssetType", "producer-project", [], [department_form]
        )

        assert "glossaryTerms" not in datazone_client.create_asset.call_args[1]

    def test_create_asset_includes_glossary_terms(
        self, service, datazone_client, department_form
    ):
        service.create_asset(
            "TestDepartmentAsset",
            "JsonAssetType",
            "producer-project",
            ["DepartmentGlossary"],
            [department_form],
        )

        kwargs = datazone_client.create_asset.call_args[1]
        assert kwargs["glossaryTerms"] == ["DepartmentGlossary"]

    def test_create_asset_uses_explicit_description(
        self, service, datazone_client, department_form
    ):
        service.create_asset(
            "TestDepartmentAsset",
            "JsonAssetType",
            "producer-project",
            [],
            [department_form],
            description="Departments of the producer org",
        )

        kwargs = datazone_client.create_asset.call_args[1]
        assert kwargs["description"] == "Departments of the producer org"

    def test_create_asset_unknown_project_raises_before_create(
        self, service, datazone_client, department_form
    ):
        with pytest.raises(ProjectNotFoundError) as exc_info:
            service.create_asset(
                "TestDepartmentAsset", "JsonAssetType", "no-such-project", [], [department_form]
            )

        assert exc_info.value.name == "no-such-project"
        assert str(exc_info.value.message) == "Project not found: no-such-project"
        datazone_client.get_asset_type.assert_not_called()
        datazone_client.create_asset.assert_not_called()

    def test_create_asset_unknown_type_raises_before_create(
        self, service, datazone_client, client_error, department_form
    ):
        datazone_client.get_asset_type.side_effect = client_error(
            "ResourceNotFoundException"
        )

        with pytest.raises(AssetTypeNotFoundError) as exc_info:
            service.create_asset(
                "TestDepartmentAsset", "NoSuchType", "producer-project", [], [department_form]
            )

        assert exc_info.value.message == "Asset type not found: NoSuchType"
        datazone_client.create_asset.assert_not_called()

    def test_update_asset_creates_revision(self, service, datazone_client, department_form):
        response = service.update_asset("TestDepartmentAsset", "bb6qulorb02wiq", [department_form])

        assert response["revision"] == "2"
        datazone_client.create_asset_revision.assert_called_once_with(
            domainIdentifier=service.domain_identifier,
            name="TestDepartmentAsset",
            description="Test asset creation: TestDepartmentAsset",
            identifier="bb6qulorb02wiq",
            formsInput=[
                {
                    "formName": "DepartmentMetadataForm",
                    "typeIdentifier": "DepartmentMetaDataForm",
                }
            ],
        )


class TestLineageEvents:
    """Posting and reading lineage events."""

    def test_post_lineage_event_sends_run_event(self, service, datazone_client):
        service.post_lineage_event("c0vdcl6vwvjr4y", "563t51p703os9u")

        kwargs = datazone_client.post_lineage_event.call_args[1]
        assert kwargs["domainIdentifier"] == service.domain_identifier
        assert isinstance(kwargs["event"], bytes)

        event = json.loads(kwargs["event"].decode("utf-8"))
        assert event["eventType"] == "COMPLETE"
        assert event["job"] == {
            "namespace": service.domain_identifier,
            "name": "DatazoneLineageJob",
            "facets": {},
        }
        assert event["inputs"][0]["name"] == "c0vdcl6vwvjr4y"
        assert event["outputs"][0]["name"] == "563t51p703os9u"
        assert event["inputs"][0]["namespace"] == service.domain_identifier
        assert isinstance(event["eventTime"], str)

    def test_post_lineage_event_uses_fresh_client_token(self, service, datazone_client):
        service.post_lineage_event("a", "b")
        service.post_lineage_event("a", "b")

        first, second = datazone_client.post_lineage_event.call_args_list
        assert first[1]["clientToken"] != second[1]["clientToken"]

    def test_post_lineage_event_custom_job_name(self, service, datazone_client):
        service.post_lineage_event("a", "b", job_name="NightlyCopy")

        event = json.loads(datazone_client.post_lineage_event.call_args[1]["event"])
        assert event["job"]["name"] == "NightlyCopy"

    def test_get_lineage_event_decodes_payload(self, service, datazone_client):
        payload = {"eventType": "COMPLETE", "run": {"runId": "r-1"}}
        datazone_client.get_lineage_event.return_value = {
            "id": "3jsqbte83xrjqa",
            "domainId": service.domain_identifier,
            "event": io.BytesIO(json.dumps(payload).encode("utf-8")),
        }

        result = service.get_lineage_event("3jsqbte83xrjqa")

        assert result["id"] == "3jsqbte83xrjqa"
        assert result["event"] == payload
        datazone_client.get_lineage_event.assert_called_once_with(
            domainIdentifier=service.domain_identifier,
            identifier="3jsqbte83xrjqa",
        )

    def test_get_lineage_event_without_payload(self, service, datazone_client):
        datazone_client.get_lineage_event.return_value = {"id": "3jsqbte83xrjqa"}

        result = service.get_lineage_event("3jsqbte83xrjqa")

        assert "event" not in result
