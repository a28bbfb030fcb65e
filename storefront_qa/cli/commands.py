"""CLI commands for storefront-qa."""

from __future__ import annotations

import json
import logging
import os
import sys

import click
import pytest
from rich.console import Console
from rich.table import Table

from storefront_qa.config import PROFILES, SuiteSettings, get_settings, load_config
from storefront_qa.config.settings import CONFIG_PATH_ENV
from storefront_qa.errors import ConfigValidationError

SUITES: dict[str, tuple[str, ...]] = {
    "ui": ("ui",),
    "api": ("api",),
    "integration": ("integration",),
    "unit": ("unit",),
    "all": (),
}


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_pytest_args(
    suite: str,
    tests_dir: str = "tests",
    headed: bool = False,
    strict_locators: bool = False,
    e2e: bool = False,
    keyword: str | None = None,
    verbose: bool = False,
) -> list[str]:
    """Translate ``run`` options into a pytest command line."""
    subdirs = SUITES[suite]
    args = [os.path.join(tests_dir, d) for d in subdirs] if subdirs else [tests_dir]
    # UI and integration suites only do anything with a browser.
    if e2e or suite in ("ui", "integration"):
        args.append("--e2e")
    if headed:
        args.append("--headed")
    if strict_locators:
        args.append("--strict-locators")
    if keyword:
        args.extend(["-k", keyword])
    if verbose:
        args.append("-v")
    return args


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to YAML config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """storefront-qa - end-to-end checks for the demo storefront."""
    ctx.ensure_object(dict)
    setup_logging(verbose)

    if config:
        os.environ[CONFIG_PATH_ENV] = config
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _load_settings(ctx: click.Context) -> SuiteSettings:
    """Settings for the commands that need them; ``envs`` runs without."""
    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = load_config(ctx.obj["config"])
        except ConfigValidationError as e:
            raise click.ClickException(str(e)) from e
    return ctx.obj["settings"]


@cli.command()
@click.argument("suite", type=click.Choice(list(SUITES)), default="all")
@click.option("--env", "env", type=click.Choice(list(PROFILES)), help="API environment profile")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--strict-locators", is_flag=True, help="Fail on missing elements instead of soft-failing")
@click.option("--e2e", is_flag=True, help="Include tests against the live storefront")
@click.option("-k", "keyword", help="Only run tests matching this pytest expression")
@click.option("--tests-dir", default="tests", show_default=True, help="Root of the test tree")
@click.pass_context
def run(
    ctx: click.Context,
    suite: str,
    env: str | None,
    headed: bool,
    strict_locators: bool,
    e2e: bool,
    keyword: str | None,
    tests_dir: str,
) -> None:
    """Run a test suite (ui, api, integration, unit or all) with pytest.

    Exits with pytest's exit code.
    """
    if env:
        os.environ["API_ENV"] = env
        get_settings.cache_clear()

    args = build_pytest_args(
        suite,
        tests_dir=tests_dir,
        headed=headed,
        strict_locators=strict_locators,
        e2e=e2e,
        keyword=keyword,
        verbose=ctx.obj["verbose"],
    )
    api_env = _load_settings(ctx).api_env
    click.echo(f"Running {suite} tests against {api_env}: pytest {' '.join(args)}")
    sys.exit(int(pytest.main(args)))


@cli.command()
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def envs(output_format: str) -> None:
    """List the API environment profiles."""
    if output_format == "json":
        click.echo(json.dumps({name: p.model_dump() for name, p in PROFILES.items()}, indent=2))
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Env")
    table.add_column("Base URL")
    table.add_column("Timeout", justify="right")
    table.add_column("Max response", justify="right")
    table.add_column("Retries", justify="right")
    for name, p in PROFILES.items():
        table.add_row(
            name,
            p.base_url,
            f"{p.timeout_ms}ms",
            f"{p.max_response_time_ms}ms",
            str(p.auth_retry_attempts),
        )
    Console().print(table)


@cli.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the resolved settings and profile as JSON."""
    settings = _load_settings(ctx)
    click.echo(
        json.dumps(
            {"settings": settings.model_dump(), "profile": settings.profile.model_dump()},
            indent=2,
        )
    )
