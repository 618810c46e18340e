"""OpenLineage run events for DataZone lineage ingestion."""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# https://openlineage.io/docs/spec/object-model
SCHEMA_URL = "https://openlineage.io/spec/2-0-2/OpenLineage.json#/definitions/RunEvent"
PRODUCER = "urn:datazone-demo:lineage"
DEFAULT_JOB_NAME = "DatazoneLineageJob"
EVENT_TYPE_COMPLETE = "COMPLETE"


def format_event_time(value: datetime) -> str:
    """Render a timestamp as ISO-8601 with an explicit offset.

    Naive datetimes are taken to be UTC. A zero offset is written as ``Z``.

    Args:
        value: Timestamp to format

    Returns:
        ISO-8601 string, e.g. ``2024-01-01T00:00:00Z``
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    formatted = value.isoformat()
    if formatted.endswith("+00:00"):
        formatted = formatted[: -len("+00:00")] + "Z"
    return formatted


def _dataset(namespace: str, name: str) -> Dict[str, Any]:
    return {"namespace": namespace, "name": name, "facets": {}}


def build_run_event(
    namespace: str,
    source_name: str,
    target_name: str,
    job_name: str = DEFAULT_JOB_NAME,
    event_time: Optional[datetime] = None,
    run_id: Optional[str] = None,
    producer: str = PRODUCER,
) -> Dict[str, Any]:
    """Build a COMPLETE run event linking one input dataset to one output.

    Args:
        namespace: Namespace for the job and both datasets (the domain id)
        source_name: Input dataset name (source asset id)
        target_name: Output dataset name (target asset id)
        job_name: OpenLineage job name
        event_time: Event timestamp (defaults to now, UTC)
        run_id: Run id (defaults to a fresh UUID4)
        producer: URI identifying the event producer

    Returns:
        Run event dictionary; ``eventTime`` is left as a datetime for
        :func:`serialize_event`
    """
    return {
        "eventType": EVENT_TYPE_COMPLETE,
        "eventTime": event_time or datetime.now(timezone.utc),
        "producer": producer,
        "schemaURL": SCHEMA_URL,
        "run": {"runId": run_id or str(uuid.uuid4()), "facets": {}},
        "job": {"namespace": namespace, "name": job_name, "facets": {}},
        "inputs": [_dataset(namespace, source_name)],
        "outputs": [_dataset(namespace, target_name)],
    }


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_event_time(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_event(event: Dict[str, Any]) -> str:
    """Serialize a run event to JSON, writing datetimes as ISO-8601 strings."""
    return json.dumps(event, default=_json_default)
