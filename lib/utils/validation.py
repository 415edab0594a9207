"""Validation helpers."""

def ensure(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def ensure_route_path(path: str) -> None:
    """Route paths are literal URL paths such as ``/`` or ``/packages``."""
    ensure(isinstance(path, str) and path.startswith("/"), f"route path must start with '/': {path!r}")
    ensure("?" not in path and "#" not in path, f"route path must not carry a query or fragment: {path!r}")
