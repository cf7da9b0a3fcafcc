"""Deploy command implementation"""

import sys
import time

import click

from ..utils.output import console, format_deploy_result, format_error, format_sync_report
from ...api.deployer import Deployer
from ...constants import EMOJI_ROCKET
from ...services import ConfigService
from ...utils.async_utils import run_async


@click.command()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Project configuration file (default: ui5.yaml)')
@click.option('--transport-request', help='ABAP transport request')
@click.option('--username', help='User name for the target system')
@click.option('--password', help='Password for the target system')
@click.option('--space', help='Cloud Foundry space')
@click.option('--dry-run', is_flag=True, help='Show the changes without applying them')
@click.pass_context
def deploy(ctx, config_path, transport_request, username, password, space, dry_run):
    """Deploy the build output to the configured target

    Reads the project configuration, connects to the target system and
    brings the remote application in line with the local build.

    Examples:

        # Deploy with the settings in ui5.yaml
        ui5-deployer deploy

        # Deploy to an ABAP system with a transport request
        ui5-deployer deploy --transport-request K900123 --username DEV

        # Preview the changes on an ABAP system
        ui5-deployer deploy --dry-run
    """
    start_time = time.monotonic()
    context = None

    try:
        project = ConfigService(config_path).load_project(
            transport_request=transport_request,
            username=username,
            password=password,
            space=space,
        )

        deployer = Deployer()
        context = deployer.create_context(project, dry_run=dry_run)
        console.print(f"[cyan]{EMOJI_ROCKET} Deploying {project.name} to {project.deployer.type}...[/cyan]")

        result = run_async(deployer.deploy_async(project, context=context))
        format_deploy_result(result, show_paths=ctx.obj.debug or dry_run)

    except KeyboardInterrupt:
        console.print("\n[yellow]Deploy cancelled[/yellow]")
        sys.exit(1)
    except Exception as e:
        _report_failure(ctx, e, context, start_time)


def _report_failure(ctx, error, context, start_time):
    if context is not None and context.report is not None and not context.report.success:
        format_sync_report(context.report)
    format_error(error, elapsed=time.monotonic() - start_time)
    if ctx.obj.debug:
        console.print_exception()
    sys.exit(1)
