import pytest
from pydantic import ValidationError

from lib.contracts.route_table import Route, RouteTable
from lib.utils.helpers import raw_file_url


def test_lookup_is_exact():
    table = RouteTable.from_mapping({"/": "https://host/a", "/packages": "https://host/b"})
    assert table.lookup("/") == "https://host/a"
    assert table.lookup("/packages") == "https://host/b"
    assert table.lookup("/packages/") is None
    assert table.lookup("/Packages") is None
    assert table.lookup("") is None


def test_order_is_preserved():
    table = RouteTable.from_mapping({"/packages": "b", "/": "a", "/flatpaks": "c"})
    assert table.paths() == ("/packages", "/", "/flatpaks")
    assert len(table) == 3


def test_duplicate_paths_rejected():
    with pytest.raises(ValidationError):
        RouteTable(routes=(Route(path="/", upstream_url="a"), Route(path="/", upstream_url="b")))


def test_table_is_frozen():
    table = RouteTable.from_mapping({"/": "a"})
    with pytest.raises(ValidationError):
        table.routes = ()


def test_raw_file_url_normalises_slashes():
    assert (
        raw_file_url("https://raw.githubusercontent.com/", "/owner/repo/", "master", "/flatpaks.txt")
        == "https://raw.githubusercontent.com/owner/repo/refs/heads/master/flatpaks.txt"
    )
