"""Two runs against a real local git remote: clone, then fetch-only."""

import os
import shutil
import subprocess

import pytest

from conftest import FakeLister

from ghpokemon.core.git_client import GitClient
from ghpokemon.core.types import Repository
from ghpokemon.services.sync import sync_org

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

IDENTITY = ["-c", "user.name=Test", "-c", "user.email=test@example.com"]


def git(cwd, *args):
    out = subprocess.run(["git", *IDENTITY, *args], cwd=cwd, check=True, capture_output=True, text=True)
    return out.stdout.strip()


@pytest.fixture
def upstream(tmp_path):
    src = tmp_path / "upstream"
    src.mkdir()
    git(src, "init", "-q")
    git(src, "commit", "-q", "--allow-empty", "-m", "initial")
    return src


def test_second_run_only_fetches_and_keeps_local_head(upstream, make_config, capsys):
    config = make_config()
    lister = FakeLister([Repository(name="proj", ssh_url="", clone_url=str(upstream))])
    clone = os.path.join(config.path, "proj")

    first = sync_org(config, client=lister, git=GitClient())
    assert first.errors == 0
    assert "Successfully cloned repository: proj" in capsys.readouterr().out
    head = git(clone, "rev-parse", "HEAD")

    second = sync_org(config, client=lister, git=GitClient())
    assert second.errors == 0
    assert "Successfully fetched updates for proj" in capsys.readouterr().out
    assert git(clone, "rev-parse", "HEAD") == head

    git(upstream, "commit", "-q", "--allow-empty", "-m", "upstream moved on")
    new_upstream = git(upstream, "rev-parse", "HEAD")

    third = sync_org(config, client=lister, git=GitClient())
    assert third.errors == 0
    assert git(clone, "rev-parse", "HEAD") == head
    assert git(clone, "rev-parse", "origin/HEAD") == new_upstream
