import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from lib.contracts.route_table import RouteTable
from lib.utils.helpers import env_override, raw_file_url
from lib.utils.validation import ensure, ensure_route_path

from .yaml_loader import load_yaml

DEFAULT_CONFIG_PATH = "config/setup_proxy.yaml"
DEFAULT_BASE_URL = "https://raw.githubusercontent.com"
DEFAULT_REPOSITORY = "JonasunderscoreJones/ArchSystemSetup"
DEFAULT_BRANCH = "main"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_ROUTES: Dict[str, str] = {
    "/": "syssetup.sh",
    "/flatpaks": "flatpaks.txt",
    "/packages": "packages.txt",
}

ENV_CONFIG = "SETUP_PROXY_CONFIG"
ENV_BRANCH = "SETUP_PROXY_BRANCH"
ENV_TIMEOUT = "SETUP_PROXY_TIMEOUT"
ENV_LOG_LEVEL = "SETUP_PROXY_LOG_LEVEL"


@dataclass
class ProxyConfig:
    """Typed view over ``setup_proxy.yaml``.

    A deployment variant differs from another only by ``branch``; everything
    else (repository, file names, timeout) is shared. The route table is
    derived from these values by :meth:`route_table`.
    """

    base_url: str = DEFAULT_BASE_URL
    repository: str = DEFAULT_REPOSITORY
    branch: str = DEFAULT_BRANCH
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    routes: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ROUTES))
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        ensure(bool(self.base_url and self.base_url.strip()), "base_url must not be empty")
        ensure(bool(self.repository and self.repository.strip("/ ")), "repository must not be empty")
        ensure(bool(self.branch and self.branch.strip("/ ")), "branch must not be empty")
        ensure(self.timeout_seconds > 0, f"timeout_seconds must be positive, got {self.timeout_seconds}")
        ensure(bool(self.routes), "at least one route is required")
        for path, filename in self.routes.items():
            ensure_route_path(path)
            ensure(bool(filename), f"route {path!r} has no file name")

    def route_table(self) -> RouteTable:
        return RouteTable.from_mapping(
            {
                path: raw_file_url(self.base_url, self.repository, self.branch, filename)
                for path, filename in self.routes.items()
            }
        )


def _parse_timeout(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"timeout_seconds must be a number, got {raw!r}") from None


def load_proxy_config(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProxyConfig:
    """Load the proxy configuration and return a :class:`ProxyConfig`.

    Parameters
    ----------
    path:
        YAML file to read. Defaults to ``$SETUP_PROXY_CONFIG`` and then to
        ``config/setup_proxy.yaml``. Only a missing default file yields the
        built-in defaults; an explicitly named file must exist.
    environ:
        Mapping consulted for the ``SETUP_PROXY_*`` overrides. Defaults to
        :data:`os.environ`.
    """

    env = os.environ if environ is None else environ
    chosen = path or env_override(env.get(ENV_CONFIG))
    if chosen is not None:
        ensure(Path(chosen).is_file(), f"config file not found: {chosen}")
    path = chosen or DEFAULT_CONFIG_PATH

    raw: Dict[str, Any] = {}
    if Path(path).exists():
        raw = load_yaml(path).get("setup_proxy", {}) or {}
        ensure(isinstance(raw, dict), f"{path}: setup_proxy must be a mapping")

    routes = raw.get("routes")
    if routes is not None:
        ensure(isinstance(routes, dict), "routes must be a mapping of path to file name")
        routes = {str(p): str(f) for p, f in routes.items()}

    branch = env_override(env.get(ENV_BRANCH)) or raw.get("branch", DEFAULT_BRANCH)
    timeout = env_override(env.get(ENV_TIMEOUT)) or raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    log_level = env_override(env.get(ENV_LOG_LEVEL)) or raw.get("log_level", "INFO")

    return ProxyConfig(
        base_url=str(raw.get("base_url", DEFAULT_BASE_URL)),
        repository=str(raw.get("repository", DEFAULT_REPOSITORY)),
        branch=str(branch),
        timeout_seconds=_parse_timeout(timeout),
        routes=routes if routes is not None else dict(DEFAULT_ROUTES),
        log_level=str(log_level),
    )
