"""GitHub repository URL helpers."""

from __future__ import annotations

import re

from release_pr.exceptions import ConfigValidationError

_REPO_URL_PATTERNS = (
    # https://github.com/owner/repo(.git)(/...)
    re.compile(r"^(?:https?|git|ssh)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<owner>[^/]+)/(?P<repo>[^/#?]+?)(?:\.git)?/?(?:[/#?].*)?$"),
    # git@github.com:owner/repo(.git)
    re.compile(r"^[^@\s]+@(?P<host>[^:]+):(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"),
    # github.com/owner/repo
    re.compile(r"^(?P<host>[\w.-]+\.[a-z]{2,})/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"),
    # owner/repo
    re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?$"),
)


def parse_github_repo_url(url: str) -> tuple[str, str]:
    """Split a repository URL into ``(owner, repo)``.

    Accepts https and ssh clone URLs, bare ``host/owner/repo`` paths and
    the ``owner/repo`` shorthand.

    Raises:
        ConfigValidationError: If the URL is not recognised
    """
    text = url.strip()
    for pattern in _REPO_URL_PATTERNS:
        match = pattern.match(text)
        if match:
            return match.group("owner"), match.group("repo")
    raise ConfigValidationError(f"Unable to parse repository URL: {url!r}")


def repository_web_url(url: str, host: str = "github.com") -> str:
    """Browser URL of the repository, used for changelog links."""
    owner, repo = parse_github_repo_url(url)
    return f"https://{host}/{owner}/{repo}"
