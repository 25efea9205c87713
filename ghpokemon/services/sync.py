"""Service: mirror every non-archived repository of an organisation."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, Protocol

from ..core.constants import DIR_MODE, SSH_DOCS_URL, TOKEN_DOCS_URL, TOKEN_ENV
from ..core.diagnostics import AUTH_ERROR_HEADER
from ..core.git_client import GitClient
from ..core.github_client import GitHubClient, GitHubError
from ..core.types import RepoResult, Repository, RunConfig, SyncSummary
from ..core.worker import GitRunner, process_repository

log = logging.getLogger(__name__)


class SyncError(RuntimeError):
    pass


class RepoLister(Protocol):
    def list_org_repos(self, org: str) -> list[Repository]: ...


def non_archived(repos: Iterable[Repository]) -> list[Repository]:
    return [r for r in repos if not r.archived]


def _check_preconditions(config: RunConfig, git: GitRunner) -> None:
    if not git.available():
        raise SyncError("git is not installed or not in PATH")
    try:
        os.makedirs(config.path, mode=DIR_MODE, exist_ok=True)
    except OSError as e:
        raise SyncError(f"failed to create target directory: {e}") from e
    if not config.token:
        raise SyncError(
            f"{TOKEN_ENV} environment variable not set. "
            f'Please set it with: export {TOKEN_ENV}="your-personal-access-token"'
        )


def _run_one(repo: Repository, config: RunConfig, git: GitRunner) -> RepoResult:
    try:
        return process_repository(repo, config, git)
    except Exception as e:
        log.exception("unexpected failure processing %s", repo.name)
        return RepoResult(repo.name, False, f"Error processing repository {repo.name}: {e}")


def _print_summary(config: RunConfig, summary: SyncSummary) -> None:
    print(
        f"\nSummary: Processed {summary.processed}/{summary.total} "
        f"non-archived repositories from organization {config.org}"
    )
    if summary.errors:
        print(f"Encountered {summary.errors} errors during processing")
        if summary.auth_errors:
            print("\nSome authentication errors were detected. Please verify your setup:")
            print(f"1. SSH setup guide: {SSH_DOCS_URL}")
            print(f"2. Personal access token guide: {TOKEN_DOCS_URL}")
    else:
        print("All repositories processed successfully")

    print("\nNote: For existing repositories, only 'git fetch --all' was performed.")
    print("Local branches were not modified. Use 'git merge' or 'git rebase' manually to update local branches.")


def sync_org(
    config: RunConfig,
    *,
    client: RepoLister | None = None,
    git: GitRunner | None = None,
) -> SyncSummary:
    """Clone missing repositories and fetch existing ones under config.path.

    Raises SyncError when a precondition fails or listing fails; per-repository
    failures are only reported.
    """
    git = git or GitClient()
    _check_preconditions(config, git)
    if config.verbose:
        print("GitHub token found in environment")

    try:
        lister = client or GitHubClient(config.token)
        repos = lister.list_org_repos(config.org)
    except GitHubError as e:
        raise SyncError(f"failed to list repositories: {e}") from e

    todo = non_archived(repos)
    summary = SyncSummary(listed=len(repos), total=len(todo))
    print(f"Found {summary.listed} repositories in organization {config.org} ({summary.total} non-archived)")
    if not todo:
        print("No non-archived repositories found. Nothing to process.")
        return summary

    print(f"Processing repositories with {config.parallel} parallel workers")
    with ThreadPoolExecutor(max_workers=config.parallel, thread_name_prefix="repo-worker") as pool:
        try:
            futures = [pool.submit(_run_one, repo, config, git) for repo in todo]
            for fut in as_completed(futures):
                result = fut.result()
                summary.processed += 1
                print(f"[{summary.processed}/{summary.total}] {result.message}")
                if not result.success:
                    summary.errors += 1
                    if AUTH_ERROR_HEADER in result.message:
                        summary.auth_errors = True
        except KeyboardInterrupt:
            # Workers never see the signal; stop queued jobs and running git children here.
            pool.shutdown(wait=False, cancel_futures=True)
            git.kill_all()
            raise

    _print_summary(config, summary)
    return summary
