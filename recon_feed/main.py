"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or executes one reconciliation run.
"""

import argparse

import uvicorn

from recon_feed.bootstrap import bootstrap_create_application, bootstrap_create_recon_orchestrator
from recon_feed.config import config_configure_logging, config_load_settings
from recon_feed.domain import ReconRunError


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Raises:
        SystemExit: Raised with status 1 when a reconciliation run fails.
    """

    argument_parser = argparse.ArgumentParser(description="Reconciliation event feed runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "recon-run"),
        help="Runtime command: `api` starts server, `recon-run` executes one reconciliation run",
        type=str,
    )
    argument_parser.add_argument("--data-source", dest="data_source", type=str, help="Named source database")
    argument_parser.add_argument(
        "--resource-object-name",
        dest="resource_object_name",
        type=str,
        help="Reconciliation profile name",
    )
    argument_parser.add_argument("--table-name", dest="table_name", type=str, help="Source table name")
    argument_parser.add_argument("--filter", dest="filter_clause", type=str, help="SQL clause appended to the scan")
    argument_parser.add_argument("--mapping-lookup", dest="mapping_lookup", type=str, help="Field mapping lookup name")
    argument_parser.add_argument("--it-resource-name", dest="it_resource_name", type=str, help="Resource instance name")
    argument_parser.add_argument("--link-column-name", dest="link_column_name", type=str, help="Child link column")
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    config_configure_logging(settings.log_level)

    if parsed_arguments.command == "recon-run":
        try:
            recon_orchestrator = bootstrap_create_recon_orchestrator(
                settings=settings,
                data_source=parsed_arguments.data_source,
                resource_object_name=parsed_arguments.resource_object_name,
                table_name=parsed_arguments.table_name,
                filter_clause=parsed_arguments.filter_clause,
                mapping_lookup=parsed_arguments.mapping_lookup,
                it_resource_name=parsed_arguments.it_resource_name,
                link_column_name=parsed_arguments.link_column_name,
            )
        except ReconRunError as error:
            print(f"{error.error_code}: {error}")
            raise SystemExit(1) from error

        execution_result = recon_orchestrator.job_execute(job_name="recon_run")
        if execution_result.status != "success":
            print(f"{execution_result.error_code}: {execution_result.error_message}")
            raise SystemExit(1)
        print(f"RECON_RUN_SUCCESS: {execution_result.event_count} events submitted")
        return

    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


if __name__ == "__main__":
    main()
