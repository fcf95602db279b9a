"""CLI main entry point."""

import sys
from pathlib import Path

import click

from .config import InstallerConfig, load_config
from .deploy import DeploymentSequencer, StackManager, select_mode
from .errors import InstallerError
from .preflight import CapabilityGate, RuntimeChecker, default_requirements
from .shared.logging import configure_logging, level_for_verbosity


@click.group()
@click.version_option(package_name="tower-installer", prog_name="tower-installer")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file path",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: int, log_json: bool) -> None:
    """Tower Installer."""
    configure_logging(level_for_verbosity(verbose), json_output=log_json)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


def _exit_with(error: InstallerError) -> None:
    click.echo(f"✗ {error}", err=True)
    sys.exit(1)


def run_preflight(config: InstallerConfig, force: bool) -> bool:
    """Run the hardware gate and runtime checks.

    Returns:
        True if every stack image is already present locally.
    """
    click.echo("> checking hardware requirements...")
    required, expected = default_requirements(config.migration_port)
    CapabilityGate(required, expected).run(force=force)

    click.echo(f"> checking {config.runtime_command} and {config.compose_command}...")
    checker = RuntimeChecker(config)
    checker.ensure_runtime()
    return checker.check_images()


@cli.command()
@click.option(
    "--from-source",
    "source_dir",
    help="Install tower from source code, please provide the directory of tower source code.",
)
@click.option("--from-tar", "tar_file", help="Load tower images from the given archive.")
@click.option("--force", is_flag=True, help="Reset data and force deploy a new tower service")
@click.pass_context
def deploy(ctx: click.Context, source_dir: str | None, tar_file: str | None, force: bool) -> None:
    """Deploy tower service.

    Without --from-source or --from-tar the published images are used.

    Examples:

        # Deploy published images
        tower-installer deploy

        # Build and deploy a source checkout, resetting data
        tower-installer deploy --from-source ../tower --force

        # Load images from an archive first
        tower-installer deploy --from-tar ./dist/tower.tar
    """
    if source_dir and tar_file:
        raise click.UsageError("--from-source and --from-tar cannot be used together")

    config: InstallerConfig = ctx.obj["config"]
    try:
        mode = select_mode(source_dir, tar_file)
        run_preflight(config, force)
        click.echo("> starting tower containers...")
        DeploymentSequencer(config, force=force).deploy(mode)
    except InstallerError as e:
        _exit_with(e)

    click.echo("✓ Tower deployed.")


@cli.command()
@click.option("--force", is_flag=True, help="Report hardware failures as warnings")
@click.pass_context
def check(ctx: click.Context, force: bool) -> None:
    """Run pre-flight checks without deploying."""
    config: InstallerConfig = ctx.obj["config"]
    try:
        images_present = run_preflight(config, force)
    except InstallerError as e:
        _exit_with(e)

    if images_present:
        click.echo("✓ Ready to deploy.")
    else:
        click.echo("✓ Ready to deploy (missing images will be pulled or loaded).")


@cli.command()
@click.pass_context
def down(ctx: click.Context) -> None:
    """Shut down tower service."""
    try:
        StackManager(ctx.obj["config"]).down()
    except InstallerError as e:
        _exit_with(e)

    click.echo("✓ Tower stack stopped.")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
