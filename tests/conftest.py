"""Shared test fixtures: fake git runner and fake listing client."""

import threading
import time

import pytest

from ghpokemon.core.types import CommandResult, Repository, RunConfig


class FakeGit:
    """Records git invocations; answers per subcommand."""

    def __init__(self, responses=None, delay=0.0, available=True):
        self.responses = responses or {}
        self.delay = delay
        self._available = available
        self.calls = []
        self.live = 0
        self.max_live = 0
        self.killed = False
        self._lock = threading.Lock()

    def available(self):
        return self._available

    def run(self, args, cwd=None):
        with self._lock:
            self.calls.append((list(args), cwd))
            self.live += 1
            self.max_live = max(self.max_live, self.live)
        try:
            if self.delay:
                time.sleep(self.delay)
            return self.responses.get(args[0], CommandResult(0, b""))
        finally:
            with self._lock:
                self.live -= 1

    def kill_all(self):
        self.killed = True

    def subcommands(self):
        return [args[0] for args, _ in self.calls]


class FakeLister:
    def __init__(self, repos=None, error=None):
        self.repos = repos or []
        self.error = error
        self.orgs = []

    def list_org_repos(self, org):
        self.orgs.append(org)
        if self.error:
            raise self.error
        return list(self.repos)


def make_repo(name, archived=False, ssh_url=None, clone_url=None):
    return Repository(
        name=name,
        archived=archived,
        ssh_url=f"git@github.com:acme/{name}.git" if ssh_url is None else ssh_url,
        clone_url=f"https://github.com/acme/{name}.git" if clone_url is None else clone_url,
    )


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def make_config(tmp_path):
    """Factory for a RunConfig rooted at a temporary directory."""

    def _make(**overrides):
        values = {"org": "acme", "path": str(tmp_path / "mirror"), "token": "test-token"}
        values.update(overrides)
        return RunConfig(**values)

    return _make
