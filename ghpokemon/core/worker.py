"""Clone or fetch a single repository."""

from __future__ import annotations

import os
from typing import Protocol

from .diagnostics import with_auth_hint
from .types import CommandResult, RepoResult, Repository, RunConfig


class GitRunner(Protocol):
    def available(self) -> bool: ...

    def run(self, args: list[str], cwd: str | None = None) -> CommandResult: ...

    def kill_all(self) -> None: ...


def pick_clone_url(repo: Repository) -> str:
    """Prefer the SSH URL; fall back to HTTPS when the API gave none."""
    return repo.ssh_url or repo.clone_url


def _failure(prefix: str, res: CommandResult) -> str:
    return with_auth_hint(f"{prefix}: {res.error}\n{res.text}", res.output)


def process_repository(repo: Repository, config: RunConfig, git: GitRunner) -> RepoResult:
    """Make sure repo exists under config.path without touching local branches.

    A missing directory is cloned; an existing one gets `git fetch --all`
    (remote-tracking refs only) unless updates are skipped.
    """
    name = repo.name
    repo_path = os.path.join(config.path, name)

    if not os.path.exists(repo_path):
        res = git.run(["clone", pick_clone_url(repo), repo_path])
        if not res.ok:
            return RepoResult(name, False, _failure(f"Error cloning repository {name}", res))
        return RepoResult(name, True, f"Successfully cloned repository: {name}")

    if config.skip_update:
        if config.verbose:
            return RepoResult(name, True, f"Skipping update for existing repository: {name}")
        return RepoResult(name, True, f"Repository exists (skipping): {name}")

    res = git.run(["fetch", "--all"], cwd=repo_path)
    if not res.ok:
        return RepoResult(name, False, _failure(f"Warning: Failed to fetch for repository {name}", res))

    msg = f"Successfully fetched updates for {name}"
    if config.verbose:
        status = git.run(["status", "-sb"], cwd=repo_path)
        if status.ok:
            msg += f"\nStatus for {name}:\n{status.text}"
    return RepoResult(name, True, msg)
