"""Module holding constants used across github-pokemon."""

PROGRAM_NAME = "github-pokemon"
API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "github-pokemon (+https://github.com)"
HTTP_TIMEOUT_SEC = 30
PER_PAGE = 100
REPO_TYPE = "all"

TOKEN_ENV = "GITHUB_TOKEN"
VERSION_FILE = "VERSION"
DEV_VERSION = "0.0.0-dev"

DEFAULT_PARALLEL = 5
DIR_MODE = 0o755

SSH_DOCS_URL = "https://docs.github.com/en/authentication/connecting-to-github-with-ssh"
TOKEN_DOCS_URL = (
    "https://docs.github.com/en/authentication/keeping-your-account-and-data-secure/"
    "creating-a-personal-access-token"
)
