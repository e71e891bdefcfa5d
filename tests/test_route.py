import pytest

from filterway.route import Route, current_route, is_set, set_route


def test_new_route_starts_at_zero():
    route = Route({"path": "/foo"}, None)
    assert route.matched_path_index() == 0
    assert route.request == {"path": "/foo"}
    assert route.remote_addr is None


def test_set_and_reset_matched_index():
    route = Route("req", ("127.0.0.1", 3030))
    saved = route.matched_path_index()
    route.set_matched_path_index(4)
    assert route.matched_path_index() == 4
    route.reset_matched_path_index(saved)
    assert route.matched_path_index() == saved


def test_negative_index_rejected():
    route = Route("req", None)
    with pytest.raises(ValueError):
        route.set_matched_path_index(-1)
    with pytest.raises(TypeError):
        route.reset_matched_path_index("3")


def test_set_route_makes_route_current():
    route = Route("req", None)
    assert is_set() is False
    with set_route(route) as active:
        assert active is route
        assert is_set() is True
        assert current_route() is route
    assert is_set() is False


def test_current_route_outside_filter_raises():
    with pytest.raises(RuntimeError):
        current_route()


def test_nested_set_raises():
    outer, inner = Route("a", None), Route("b", None)
    with set_route(outer):
        with pytest.raises(RuntimeError, match="nested route::set calls"):
            with set_route(inner):
                pass
        assert current_route() is outer


def test_route_cleared_after_exception():
    route = Route("req", None)
    with pytest.raises(KeyError):
        with set_route(route):
            raise KeyError("boom")
    assert is_set() is False


def test_changes_through_current_route_persist():
    route = Route("req", None)
    with set_route(route):
        current_route().set_matched_path_index(2)
    assert route.matched_path_index() == 2


def test_set_route_requires_route():
    with pytest.raises(TypeError):
        with set_route("not a route"):
            pass