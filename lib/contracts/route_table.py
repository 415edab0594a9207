"""Route table and response models used by the setup proxy."""
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Route(BaseModel):
    """A literal request path and the upstream URL it is served from."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    upstream_url: str


class RouteTable(BaseModel):
    """Ordered, immutable mapping from request path to upstream URL.

    Matching is an exact string comparison against the request path; the
    table is built once from configuration and shared by every request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    routes: Tuple[Route, ...] = ()

    @model_validator(mode="after")
    def _unique_paths(self) -> "RouteTable":
        seen = set()
        for route in self.routes:
            if route.path in seen:
                raise ValueError(f"duplicate route path: {route.path!r}")
            seen.add(route.path)
        return self

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "RouteTable":
        return cls(routes=tuple(Route(path=p, upstream_url=u) for p, u in mapping.items()))

    def lookup(self, path: str) -> Optional[str]:
        for route in self.routes:
            if route.path == path:
                return route.upstream_url
        return None

    def paths(self) -> Tuple[str, ...]:
        return tuple(route.path for route in self.routes)

    def __len__(self) -> int:
        return len(self.routes)


class ProxyResponse(BaseModel):
    """Transport-neutral result of :meth:`SetupProxy.handle`."""

    model_config = ConfigDict(frozen=True)

    status: int
    body: bytes = b""
    headers: Dict[str, str] = Field(default_factory=dict)
