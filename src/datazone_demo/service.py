"""Thin service wrapper over the Amazon DataZone control-plane API."""

import json
import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence

from botocore.exceptions import ClientError

from .exceptions import AssetTypeNotFoundError, ProjectNotFoundError, is_not_found
from .lineage import DEFAULT_JOB_NAME, build_run_event, serialize_event
from .models import FormInput

logger = logging.getLogger(__name__)


class DataZoneService:
    """Issues DataZone requests scoped to a single domain.

    Every method performs one synchronous call on the injected client (plus a
    project listing or asset-type lookup for :meth:`create_asset`), logs the raw
    response and returns it. Remote errors propagate as ``ClientError``.
    """

    def __init__(self, client: Any, domain_identifier: str):
        """Initialize service.

        Args:
            client: boto3 DataZone client (or any object with the same methods)
            domain_identifier: DataZone domain id sent with every request
        """
        self.client = client
        self.domain_identifier = domain_identifier

    def list_projects(self) -> Dict[str, Any]:
        """List projects in the domain (first page only)."""
        logger.info("Listing projects...")
        response = self.client.list_projects(domainIdentifier=self.domain_identifier)
        logger.info(f"ListProjects response: {response}")
        return response

    def get_project_id(self, project_name: str) -> Optional[str]:
        """Resolve a project id by case-insensitive exact name match.

        Args:
            project_name: Project name to look up

        Returns:
            Id of the first matching project, or None
        """
        logger.info(f"Resolving project id: {project_name}")
        wanted = project_name.casefold()
        for project in self.list_projects().get("items", []):
            if project.get("name", "").casefold() == wanted:
                return project["id"]
        return None

    def get_asset(self, asset_id: str) -> Dict[str, Any]:
        logger.info(f"Finding asset by assetId: {asset_id}")
        response = self.client.get_asset(
            domainIdentifier=self.domain_identifier,
            identifier=asset_id,
        )
        logger.info(f"GetAsset response: {response}")
        return response

    def _get_asset_type(self, asset_type: str) -> Dict[str, Any]:
        response = self.client.get_asset_type(
            domainIdentifier=self.domain_identifier,
            identifier=asset_type,
        )
        logger.info(f"GetAssetType response: {response}")
        return response

    def get_asset_type_id(self, asset_type: str) -> Optional[str]:
        """Resolve the identifier to pass as ``typeIdentifier`` for an asset type.

        GetAssetType has no separate id field; DataZone addresses asset types
        by name, so the returned identifier is the type's ``name``.

        Args:
            asset_type: Asset type name

        Returns:
            Asset type identifier, or None if the type does not exist
        """
        logger.info(f"Finding asset type: {asset_type}")
        try:
            response = self._get_asset_type(asset_type)
        except ClientError as e:
            if is_not_found(e):
                return None
            raise
        return response.get("name")

    def asset_type_exists(self, asset_type: str) -> bool:
        """Check whether an asset type exists in the domain.

        Args:
            asset_type: Asset type name

        Returns:
            True if found, False if the service reports ResourceNotFoundException

        Raises:
            ClientError: For any other remote failure
        """
        logger.info(f"Checking if asset type exists: {asset_type}")
        try:
            self._get_asset_type(asset_type)
        except ClientError as e:
            if is_not_found(e):
                return False
            raise
        return True

    def create_asset(
        self,
        asset_name: str,
        asset_type: str,
        owning_project: str,
        glossary_terms: Sequence[str],
        forms: List[FormInput],
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an asset owned by a project.

        Args:
            asset_name: Asset name
            asset_type: Asset type name
            owning_project: Owning project name (resolved case-insensitively)
            glossary_terms: Glossary term ids; omitted from the request when empty
            forms: Metadata forms to attach
            description: Asset description (defaults to a generated one)

        Returns:
            CreateAsset response

        Raises:
            ProjectNotFoundError: If the owning project cannot be resolved
            AssetTypeNotFoundError: If the asset type cannot be resolved
        """
        owning_project_id = self.get_project_id(owning_project)
        if owning_project_id is None:
            raise ProjectNotFoundError(owning_project)

        asset_type_id = self.get_asset_type_id(asset_type)
        if asset_type_id is None:
            raise AssetTypeNotFoundError(asset_type)

        logger.info("Creating asset...")
        request: Dict[str, Any] = {
            "domainIdentifier": self.domain_identifier,
            "name": asset_name,
            "owningProjectIdentifier": owning_project_id,
            "description": description or f"Test asset creation: {asset_name}",
            "formsInput": [form.to_request() for form in forms],
            "typeIdentifier": asset_type_id,
        }
        if glossary_terms:
            request["glossaryTerms"] = list(glossary_terms)

        response = self.client.create_asset(**request)
        logger.info(f"CreateAsset response: {response}")
        return response

    def update_asset(
        self,
        asset_name: str,
        asset_id: str,
        forms: List[FormInput],
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new asset revision.

        A revision replaces the asset's name, description and forms wholesale;
        forms left out of ``forms`` are dropped.

        Args:
            asset_name: New asset name
            asset_id: Identifier of the asset to revise
            forms: Complete set of metadata forms
            description: Asset description (defaults to a generated one)

        Returns:
            CreateAssetRevision response
        """
        logger.info(f"Updating asset: {asset_name}")
        response = self.client.create_asset_revision(
            domainIdentifier=self.domain_identifier,
            name=asset_name,
            description=description or f"Test asset creation: {asset_name}",
            identifier=asset_id,
            formsInput=[form.to_request() for form in forms],
        )
        logger.info(f"CreateAssetRevision response: {response}")
        return response

    def post_lineage_event(
        self,
        source_asset_id: str,
        target_asset_id: str,
        job_name: str = DEFAULT_JOB_NAME,
    ) -> Dict[str, Any]:
        """Post an OpenLineage COMPLETE event from one asset to another.

        Args:
            source_asset_id: Input dataset name
            target_asset_id: Output dataset name
            job_name: OpenLineage job name

        Returns:
            PostLineageEvent response
        """
        logger.info(f"Posting lineage event: {source_asset_id} -> {target_asset_id}")
        event = build_run_event(
            namespace=self.domain_identifier,
            source_name=source_asset_id,
            target_name=target_asset_id,
            job_name=job_name,
        )
        run_event = serialize_event(event)
        logger.info(run_event, extra={"event_type": "lineage_event_built"})

        response = self.client.post_lineage_event(
            domainIdentifier=self.domain_identifier,
            clientToken=str(uuid.uuid4()),
            event=run_event.encode("utf-8"),
        )
        logger.info(f"PostLineageEvent response: {response}")
        return response

    def get_lineage_event(self, event_id: str) -> Dict[str, Any]:
        """Fetch a lineage event and decode its payload.

        Args:
            event_id: Lineage event id

        Returns:
            GetLineageEvent response with ``event`` replaced by the decoded
            OpenLineage document
        """
        logger.info(f"Finding lineage event: {event_id}")
        response = self.client.get_lineage_event(
            domainIdentifier=self.domain_identifier,
            identifier=event_id,
        )
        logger.info(f"GetLineageEvent response: {response}")

        result = dict(response)
        payload = result.get("event")
        if payload is not None:
            if hasattr(payload, "read"):
                payload = payload.read()
            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")
            result["event"] = json.loads(payload) if payload else None
        return result
