"""Small types shared by the listing client, the workers and the sync service."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_PARALLEL


class Repository(BaseModel):
    """One repository as returned by the org listing endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    archived: bool = False
    ssh_url: str = ""
    clone_url: str = ""

    @field_validator("ssh_url", "clone_url", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return v or ""


class RunConfig(BaseModel):
    """Immutable settings for one sync run."""

    model_config = ConfigDict(frozen=True)

    org: str
    path: str
    skip_update: bool = False
    verbose: bool = False
    parallel: int = DEFAULT_PARALLEL
    token: str | None = None

    @field_validator("parallel")
    @classmethod
    def _coerce_parallel(cls, v: int) -> int:
        return v if v > 0 else DEFAULT_PARALLEL


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    output: bytes = b""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.error is None

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", "replace")


@dataclass(frozen=True)
class RepoResult:
    name: str
    success: bool
    message: str


@dataclass
class SyncSummary:
    """Counters for a run; only the draining thread writes to it."""

    listed: int = 0
    total: int = 0
    processed: int = 0
    errors: int = 0
    auth_errors: bool = False
