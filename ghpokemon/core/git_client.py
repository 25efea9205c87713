"""Run the git binary and capture what it prints."""

from __future__ import annotations

import contextlib
import logging
import shutil
import subprocess
import threading

from .types import CommandResult

log = logging.getLogger(__name__)


class GitClient:
    def __init__(self, binary: str = "git") -> None:
        self.binary = binary
        self._lock = threading.Lock()
        self._live: set[subprocess.Popen] = set()
        self._cancelled = threading.Event()

    def available(self) -> bool:
        return shutil.which(self.binary) is not None

    def run(self, args: list[str], cwd: str | None = None) -> CommandResult:
        """Run `binary *args` in cwd; stdout and stderr land in one buffer, in order."""
        if self._cancelled.is_set():
            return CommandResult(returncode=-1, error="cancelled")

        cmd = [self.binary, *args]
        log.debug("running %s (cwd=%s)", cmd, cwd)
        try:
            proc = subprocess.Popen(cmd, cwd=cwd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        except OSError as e:
            return CommandResult(returncode=-1, error=str(e))

        with self._lock:
            self._live.add(proc)
            cancelled = self._cancelled.is_set()
        if cancelled:
            proc.kill()

        try:
            out, _ = proc.communicate()
        except BaseException:
            # interrupted while waiting: don't leave the child behind
            proc.kill()
            proc.wait()
            raise
        finally:
            with self._lock:
                self._live.discard(proc)

        log.debug("%s exited with %d", cmd, proc.returncode)
        if proc.returncode != 0:
            return CommandResult(proc.returncode, out or b"", f"exit status {proc.returncode}")
        return CommandResult(0, out or b"")

    def kill_all(self) -> None:
        """Kill every running command; later calls to run() fail straight away."""
        self._cancelled.set()
        with self._lock:
            procs = list(self._live)
        for proc in procs:
            log.debug("killing %s", proc.args)
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
