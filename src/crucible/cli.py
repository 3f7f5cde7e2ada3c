# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from crucible import settings
from crucible.bundle import write_bundle
from crucible.config import config_path, load
from crucible.errors import ConfigError, CrucibleError, IdentityError
from crucible.identity import PasswdUserIDFinder
from crucible.spec import Spec
from crucible.specbuilder import VCAP_USER, build
from crucible.ui.console import Console, get_console, set_console


def _build_for_job(job_name: str, config: str | None, jobs_root: str | None) -> Spec:
    """
    Load a job's config and build its spec.

    Args:
        job_name: Name of the job
        config: Explicit config file path, overrides the conventional location
        jobs_root: Directory holding <job>/config/crucible.yml

    Returns:
        The built Spec
    """
    console = get_console()

    cfg_path = Path(config) if config else config_path(job_name, jobs_root or settings.JOBS_ROOT)
    console.print_debug(f"Loading config from {cfg_path}")
    cfg = load(cfg_path)

    console.print_debug(f"Resolving user {VCAP_USER}")
    return build(job_name, cfg, PasswdUserIDFinder())


def _report_failure(ctx: click.Context, job_name: str, exc: CrucibleError) -> None:
    console = get_console()

    if isinstance(exc, IdentityError):
        console.print_error(
            "User lookup failed",
            f"Could not resolve user '{VCAP_USER}' for job {job_name}",
            details=[str(exc)],
            suggestion=f"Make sure the '{VCAP_USER}' user exists on this host.",
        )
    elif isinstance(exc, ConfigError):
        console.print_error(
            "Invalid job config",
            f"Could not build a spec for job {job_name}",
            details=[str(exc)],
            suggestion="Check the job's config/crucible.yml or pass --config explicitly.",
        )
    else:
        console.print_exception(exc)
        return

    if ctx.obj.get("debug", False):
        console.print_exception(exc)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """crucible: build runc specs for sandboxed jobs."""
    debug = debug or settings.DEBUG
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("job_name")
@click.option("--config", default=None, help="Config file path (defaults to <jobs-root>/<job>/config/crucible.yml)")
@click.option("--jobs-root", default=None, help="Jobs directory (defaults to $CRUCIBLE_JOBS_ROOT or /var/vcap/jobs)")
@click.pass_context
def spec(ctx, job_name, config, jobs_root):
    """Print the runc spec for JOB_NAME as JSON."""
    console = get_console()

    try:
        runtime_spec = _build_for_job(job_name, config, jobs_root)
    except CrucibleError as e:
        _report_failure(ctx, job_name, e)
        sys.exit(1)

    console.print_spec(runtime_spec.to_json())


@cli.command()
@click.argument("job_name")
@click.option("--config", default=None, help="Config file path (defaults to <jobs-root>/<job>/config/crucible.yml)")
@click.option("--jobs-root", default=None, help="Jobs directory (defaults to $CRUCIBLE_JOBS_ROOT or /var/vcap/jobs)")
@click.option("--bundle-dir", default=None, help="Bundle directory (defaults to the parent of the spec's rootfs)")
@click.pass_context
def bundle(ctx, job_name, config, jobs_root, bundle_dir):
    """Write the runc bundle (config.json + rootfs/) for JOB_NAME."""
    console = get_console()

    try:
        runtime_spec = _build_for_job(job_name, config, jobs_root)
    except CrucibleError as e:
        _report_failure(ctx, job_name, e)
        sys.exit(1)

    try:
        written = write_bundle(runtime_spec, bundle_dir)
    except OSError as e:
        console.print_error(
            "Could not write bundle",
            f"Writing the bundle for job {job_name} failed",
            details=[str(e)],
            suggestion="Check that the bundles directory exists and is writable.",
        )
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)

    console.print_bundle_written(job_name, str(written))


if __name__ == "__main__":
    cli()
