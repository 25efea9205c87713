"""CLI entrypoint for github-pokemon."""

from __future__ import annotations

import logging

import typer

from ..config.settings import get_settings, read_version
from ..core.constants import DEFAULT_PARALLEL, PROGRAM_NAME
from ..core.types import RunConfig
from ..services.sync import SyncError, sync_org

app = typer.Typer(
    add_completion=False,
    help="Clone non-archived repositories for a GitHub organization, or fetch updates for existing clones.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROGRAM_NAME} version {read_version()}")
        raise typer.Exit()


@app.command()
def main(
    org: str = typer.Option(..., "--org", "-o", help="GitHub organization to fetch repositories from"),
    path: str = typer.Option(..., "--path", "-p", help="Local path to clone/update repositories to"),
    skip_update: bool = typer.Option(False, "--skip-update", "-s", help="Skip updating existing repositories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    parallel: int = typer.Option(
        DEFAULT_PARALLEL, "--parallel", "-j", help="Number of repositories to process in parallel"
    ),
    version: bool = typer.Option(
        False, "--version", "-V", is_eager=True, callback=_version_callback,
        help="Show version information and exit",
    ),
):
    """Fetch all non-archived repositories of an organization into --path.

    Missing repositories are cloned; existing ones only get 'git fetch --all',
    so local branches are never modified. Needs GITHUB_TOKEN in the environment.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    s = get_settings()
    config = RunConfig(
        org=org,
        path=path,
        skip_update=skip_update,
        verbose=verbose,
        parallel=parallel,
        token=s.github_token,
    )
    try:
        sync_org(config)
    except SyncError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt:
        typer.echo("Interrupted.", err=True)
        raise typer.Exit(code=130)


if __name__ == "__main__":
    app()
