"""Spot authentication failures in git output and suggest fixes."""

from __future__ import annotations

from .constants import SSH_DOCS_URL

# ssh prints "Permission denied (publickey)" capitalised; the lowercase form
# comes from git itself.
AUTH_MARKERS = (
    "authenticity",
    "permission denied",
    "Permission denied",
    "could not read Username",
    "auth",
)
AUTH_ERROR_HEADER = "Authentication error detected"

AUTH_REMEDIATION = (
    f"\n\n{AUTH_ERROR_HEADER}. Please ensure:\n"
    f"1. Your SSH key is set up correctly with GitHub: {SSH_DOCS_URL}\n"
    "2. Your GITHUB_TOKEN has sufficient permissions\n"
    "3. For SSH: Your SSH agent is running ('eval $(ssh-agent -s)')\n"
    "4. For HTTPS: You may need to configure credential helper "
    "('git config --global credential.helper cache')"
)


def is_auth_error(output: bytes | str) -> bool:
    # Case-sensitive on purpose: matches git/ssh messages verbatim.
    if isinstance(output, bytes):
        output = output.decode("utf-8", "replace")
    return any(marker in output for marker in AUTH_MARKERS)


def with_auth_hint(message: str, output: bytes | str) -> str:
    """Append the remediation block to message when output looks like an auth failure."""
    if is_auth_error(output):
        return message + AUTH_REMEDIATION
    return message
