"""General helper utilities."""

from typing import Optional


def raw_file_url(base_url: str, repository: str, branch: str, filename: str) -> str:
    """Return the raw-content URL of ``filename`` on ``branch``.

    >>> raw_file_url("https://raw.githubusercontent.com", "owner/repo", "main", "packages.txt")
    'https://raw.githubusercontent.com/owner/repo/refs/heads/main/packages.txt'
    """
    return "/".join(
        (
            base_url.rstrip("/"),
            repository.strip("/"),
            "refs/heads",
            branch.strip("/"),
            filename.lstrip("/"),
        )
    )


def env_override(value: Optional[str]) -> Optional[str]:
    """Treat unset and blank environment variables alike."""
    if value is None:
        return None
    value = value.strip()
    return value or None
