"""Command-line entry point for the DataZone demo client."""

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional

from botocore.exceptions import ClientError

from . import __version__
from .client import build_datazone_client
from .config import DataZoneConfig, load_config
from .exceptions import (
    ConfigurationError,
    NotFoundError,
    ProjectNotFoundError,
    get_error_code,
)
from .lineage import DEFAULT_JOB_NAME
from .logging import get_logger, setup_logging
from .models import FormInput
from .service import DataZoneService

logger = get_logger(__name__)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _department_form(config: DataZoneConfig) -> FormInput:
    return FormInput(
        form_name=config.demo.form_name,
        type_identifier=config.demo.form_type,
    )


def _parse_forms(raw_forms: Optional[List[str]]) -> List[FormInput]:
    """Parse ``FORM_NAME[:TYPE_IDENTIFIER]`` arguments into form inputs."""
    forms = []
    for raw in raw_forms or []:
        form_name, _, type_identifier = raw.partition(":")
        forms.append(
            FormInput(form_name=form_name, type_identifier=type_identifier or None)
        )
    return forms


def demo_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    """Run the canned demo call: fetch the configured lineage event."""
    service.get_lineage_event(config.demo.lineage_event_id)
    return 0


def list_projects_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    _print_json(service.list_projects().get("items", []))
    return 0


def project_id_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    project_id = service.get_project_id(args.name)
    if project_id is None:
        raise ProjectNotFoundError(args.name)
    _print_json({"name": args.name, "id": project_id})
    return 0


def get_asset_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    _print_json(service.get_asset(args.asset_id))
    return 0


def asset_type_exists_command(
    service: DataZoneService, config: DataZoneConfig, args
) -> int:
    exists = service.asset_type_exists(args.name)
    _print_json({"asset_type": args.name, "exists": exists})
    return 0


def create_asset_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    response = service.create_asset(
        args.name,
        args.asset_type,
        args.project,
        args.glossary_term or [],
        _parse_forms(args.form),
        description=args.description,
    )
    _print_json(response)
    return 0


def update_asset_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    response = service.update_asset(
        args.name,
        args.asset_id,
        _parse_forms(args.form),
        description=args.description,
    )
    _print_json(response)
    return 0


def create_department_asset_command(
    service: DataZoneService, config: DataZoneConfig, args
) -> int:
    service.create_asset(
        config.demo.asset_name,
        config.demo.asset_type,
        config.demo.project_name,
        config.demo.glossary_terms,
        [_department_form(config)],
    )
    return 0


def update_department_asset_command(
    service: DataZoneService, config: DataZoneConfig, args
) -> int:
    service.update_asset(
        config.demo.asset_name,
        config.demo.asset_id,
        [_department_form(config)],
    )
    return 0


def post_lineage_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    _print_json(
        service.post_lineage_event(args.source, args.target, job_name=args.job_name)
    )
    return 0


def get_lineage_command(service: DataZoneService, config: DataZoneConfig, args) -> int:
    _print_json(service.get_lineage_event(args.event_id))
    return 0


COMMANDS: Dict[str, Callable[..., int]] = {
    "demo": demo_command,
    "list-projects": list_projects_command,
    "project-id": project_id_command,
    "get-asset": get_asset_command,
    "asset-type-exists": asset_type_exists_command,
    "create-asset": create_asset_command,
    "update-asset": update_asset_command,
    "create-department-asset": create_department_asset_command,
    "update-department-asset": update_department_asset_command,
    "post-lineage": post_lineage_command,
    "get-lineage": get_lineage_command,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="datazone-demo",
        description="Exercise the Amazon DataZone control-plane API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch the configured demo lineage event
  datazone-demo --config datazone.yaml

  # Post lineage between two assets
  datazone-demo --domain-id dzd_abc123 post-lineage c0vdcl6vwvjr4y 563t51p703os9u
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML configuration file (falls back to DATAZONE_DEMO_CONFIG)",
    )
    parser.add_argument(
        "--domain-id",
        help="DataZone domain identifier (overrides config and DATAZONE_DOMAIN_IDENTIFIER)",
    )
    parser.add_argument("--region", help="AWS region (overrides config and AWS_REGION)")
    parser.add_argument("--profile", help="AWS profile (overrides config and AWS_PROFILE)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: from config, INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Operation to execute")

    subparsers.add_parser(
        "demo", help="Fetch the configured demo lineage event (default command)"
    )
    subparsers.add_parser("list-projects", help="List projects in the domain")

    project_parser = subparsers.add_parser(
        "project-id", help="Resolve a project id by name (case-insensitive)"
    )
    project_parser.add_argument("name", help="Project name")

    asset_parser = subparsers.add_parser("get-asset", help="Fetch an asset by id")
    asset_parser.add_argument("asset_id", help="Asset identifier")

    exists_parser = subparsers.add_parser(
        "asset-type-exists", help="Check whether an asset type exists"
    )
    exists_parser.add_argument("name", help="Asset type name")

    create_parser = subparsers.add_parser("create-asset", help="Create an asset")
    create_parser.add_argument("name", help="Asset name")
    create_parser.add_argument("--asset-type", required=True, help="Asset type name")
    create_parser.add_argument("--project", required=True, help="Owning project name")
    create_parser.add_argument("--description", help="Asset description")
    create_parser.add_argument(
        "--glossary-term",
        action="append",
        help="Glossary term id (repeatable)",
    )
    create_parser.add_argument(
        "--form",
        action="append",
        help="Metadata form as FORM_NAME[:TYPE_IDENTIFIER] (repeatable)",
    )

    update_parser = subparsers.add_parser(
        "update-asset", help="Create a new asset revision (full overwrite)"
    )
    update_parser.add_argument("asset_id", help="Asset identifier")
    update_parser.add_argument("--name", required=True, help="Asset name")
    update_parser.add_argument("--description", help="Asset description")
    update_parser.add_argument(
        "--form",
        action="append",
        help="Metadata form as FORM_NAME[:TYPE_IDENTIFIER] (repeatable)",
    )

    subparsers.add_parser(
        "create-department-asset", help="Create the demo department asset"
    )
    subparsers.add_parser(
        "update-department-asset", help="Revise the demo department asset"
    )

    post_parser = subparsers.add_parser(
        "post-lineage", help="Post a lineage event from one asset to another"
    )
    post_parser.add_argument("source", help="Source asset id")
    post_parser.add_argument("target", help="Target asset id")
    post_parser.add_argument(
        "--job-name", default=DEFAULT_JOB_NAME, help="OpenLineage job name"
    )

    lineage_parser = subparsers.add_parser(
        "get-lineage", help="Fetch a lineage event by id"
    )
    lineage_parser.add_argument("event_id", help="Lineage event identifier")

    return parser


def main(
    argv: Optional[List[str]] = None,
    client_factory: Callable[[DataZoneConfig], Any] = build_datazone_client,
) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "demo"

    try:
        config = load_config(
            args.config,
            overrides={
                "domain_identifier": args.domain_id,
                "aws_region": args.region,
                "aws_profile": args.profile,
            },
        )
    except ConfigurationError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 2

    setup_logging(
        level=args.log_level or config.logging.level,
        redact_secrets=config.logging.redaction,
        domain_id=config.domain_identifier,
    )

    service = DataZoneService(client_factory(config), config.domain_identifier)
    logger.info(f"Running command: {command}", extra={"event_type": "command_started"})

    try:
        exit_code = COMMANDS[command](service, config, args)
    except NotFoundError as e:
        logger.error(
            e.message,
            extra={"event_type": "command_failed", "extra_data": e.to_dict()},
        )
        return 1
    except ClientError as e:
        logger.error(
            f"DataZone request failed: {e}",
            extra={
                "event_type": "command_failed",
                "extra_data": {"error_code": get_error_code(e)},
            },
        )
        raise

    logger.info(f"Command finished: {command}", extra={"event_type": "command_finished"})
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
