"""
ootcheck — CLI entrypoint.

Usage:
    ootcheck check                        # probe the running kernel
    ootcheck check --build-kernel 6.1.0-13-amd64
    ootcheck check --ksrc /path/to/linux  # probe a custom tree
    ootcheck locate --json

Exit codes of ``check``:
    0  builtin        the kernel provides the capability; skip the shim
    1  misconfigured  supported but disabled in the kernel config
    2  oot-required   build the compatibility shim
    3  not-found      no kernel source or config could be located
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from ootcheck import __version__
from ootcheck.core.config.loader import ConfigError, load_profile
from ootcheck.core.models.probe import CapabilityProfile, Classification, ProbeRequest
from ootcheck.core.observability.logging_config import setup_logging
from ootcheck.core.services.release import resolve_request


class FailureExitGroup(click.Group):
    """Click group whose usage errors exit in the failure class.

    Click exits 2 on a bad command line, which build drivers would read
    as "build the shim". Usage errors are moved to the not-found code.
    """

    usage_exit_code = int(Classification.NOT_FOUND)

    def make_context(self, *args, **kwargs) -> click.Context:
        try:
            return super().make_context(*args, **kwargs)
        except click.UsageError as e:
            e.exit_code = self.usage_exit_code
            raise

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = self.usage_exit_code
            raise


@click.group(cls=FailureExitGroup)
@click.version_option(version=__version__, prog_name="ootcheck")
@click.option("--verbose", "-v", is_flag=True, help="Trace each probe stage on stderr.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress diagnostics; rely on the exit code.")
@click.option("--debug", is_flag=True, help="Enable debug logging (every path checked).")
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to ootcheck.yml (default: auto-detect, else auxiliary bus).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    profile_path: str | None,
) -> None:
    """ootcheck — decide whether a kernel compatibility shim must be built."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["profile_path"] = Path(profile_path) if profile_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("OOTCHECK_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("OOTCHECK_LOG_FILE"),
        log_file_level=os.environ.get("OOTCHECK_LOG_FILE_LEVEL"),
    )


_TARGET_OPTIONS = (
    click.option(
        "--ksrc",
        "source_path",
        type=click.Path(file_okay=False),
        default=None,
        help="Kernel source/header tree. Overrides the release-driven search.",
    ),
    click.option(
        "--build-kernel",
        "kernel_release",
        default=None,
        metavar="RELEASE",
        help="Kernel release to probe (default: the running kernel).",
    ),
    click.option(
        "--sysroot",
        type=click.Path(file_okay=False),
        default=None,
        help="Search conventional locations under this root instead of /.",
    ),
    click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON."),
)


def target_options(func):
    """Options naming the kernel to probe, shared by check and locate."""
    for option in reversed(_TARGET_OPTIONS):
        func = option(func)
    return func


def _request(
    source_path: str | None,
    kernel_release: str | None,
    sysroot: str | None,
) -> ProbeRequest:
    return resolve_request(
        source_path=source_path,
        kernel_release=kernel_release,
        sysroot=sysroot,
    )


def _profile(ctx: click.Context) -> CapabilityProfile:
    try:
        return load_profile(ctx.obj.get("profile_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(int(Classification.NOT_FOUND))


@cli.command()
@target_options
@click.pass_context
def check(
    ctx: click.Context,
    source_path: str | None,
    kernel_release: str | None,
    sysroot: str | None,
    as_json: bool,
) -> None:
    """Classify the kernel and exit with the matching code."""
    from ootcheck.core.use_cases.check import run_check

    prof = _profile(ctx)
    result = run_check(_request(source_path, kernel_release, sysroot), prof)
    verdict = result.verdict
    assert verdict is not None

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    classification = verdict.classification
    if classification.is_failure:
        if not ctx.obj.get("quiet"):
            click.secho(f"❌ {classification.label}: {verdict.detail}", fg="red", err=True)
    elif ctx.obj.get("verbose"):
        color = "green" if classification is Classification.BUILTIN else "yellow"
        click.secho(f"✓ {classification.label}: {verdict.detail}", fg=color, err=True)

    sys.exit(result.exit_code)


@cli.command()
@target_options
@click.pass_context
def locate(
    ctx: click.Context,
    source_path: str | None,
    kernel_release: str | None,
    sysroot: str | None,
    as_json: bool,
) -> None:
    """Show candidate source trees and the config a check would use."""
    from ootcheck.core.use_cases.locate import run_locate

    result = run_locate(_request(source_path, kernel_release, sysroot))
    exit_code = 0 if result.found else int(Classification.NOT_FOUND)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(exit_code)

    click.secho(f"\n🔍 Kernel {result.request.kernel_release}", fg="cyan", bold=True)
    if result.request.source_explicit:
        click.echo(f"   Source (explicit): {result.source_path}")
    else:
        click.echo("   Candidates:")
        for path, ok in result.candidates:
            marker = click.style("✓", fg="green") if ok else click.style("✗", fg="red")
            selected = "  ← selected" if path == result.source_path else ""
            click.echo(f"     {marker} {path}{selected}")

    click.echo()
    if not result.found:
        click.secho("   ❌ No kernel source tree found", fg="red")
        click.echo()
        sys.exit(exit_code)

    click.echo(f"   Source: {result.source_path}")
    if not result.release_tree:
        click.echo("   Config: (skipped, source is not the release's tree)")
    elif result.config_path:
        click.echo(f"   Config: {result.config_path}")
    else:
        click.echo("   Config: (none, header inspection will be used)")
    click.echo()


@cli.group()
def profile() -> None:
    """Capability profile commands."""


@profile.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def profile_show(ctx: click.Context, as_json: bool) -> None:
    """Print the effective capability profile."""
    prof = _profile(ctx)

    if as_json:
        click.echo(json.dumps(prof.model_dump(mode="json"), indent=2))
        return

    click.secho(f"\n📋 {prof.name}", fg="cyan", bold=True)
    if prof.description:
        click.echo(f"   {prof.description}")
    click.echo(f"   Config key:    {prof.config_key} (enabled = {prof.enabled_value})")
    click.echo(f"   Header:        {prof.header_name}")
    click.echo(f"   Shim marker:   {prof.marker_symbol}")
    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
