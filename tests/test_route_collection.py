"""Tests for the fluent builder: RouteCollection and RouteBuilderScope."""

import pytest

from willow.exceptions import InvalidArgument, RouteFrozen
from willow.routing import HandlerKind, RouteBuilderScope, RouteCollection, RouteFlag


class App:
    pass


class TestRouteCollection:
    def test_create_binds_owner(self) -> None:
        routes = RouteCollection.create(App)
        assert routes.get_class() is App
        assert len(routes) == 0
        assert not routes.is_built()

    def test_verbs_create_routes_in_order(self) -> None:
        routes = RouteCollection.create(App)
        routes.GET("a", "/a")
        routes.POST("b", "/b")
        routes.PUT("c", "/c")
        routes.DELETE("d", "/d")
        routes.route("patch", "e", "/e")

        assert [r.get_name() for r in routes] == ["a", "b", "c", "d", "e"]
        assert [r.get_method() for r in routes] == ["GET", "POST", "PUT", "DELETE", "PATCH"]
        assert all(r.get_owner() is App for r in routes)

    def test_route_returns_scope_over_new_route(self) -> None:
        routes = RouteCollection.create(App)
        scope = routes.GET("home", "/")
        assert isinstance(scope, RouteBuilderScope)
        assert scope.get_route() is routes.get_routes()[0]

    def test_empty_name_is_rejected_before_append(self) -> None:
        routes = RouteCollection.create(App)
        with pytest.raises(InvalidArgument):
            routes.route("GET", "", "/x")
        assert len(routes) == 0

    def test_empty_pattern_is_rejected_before_append(self) -> None:
        routes = RouteCollection.create(App)
        with pytest.raises(InvalidArgument):
            routes.GET("x", "")
        assert len(routes) == 0

    def test_duplicate_names_are_allowed_here(self) -> None:
        routes = RouteCollection.create(App)
        routes.GET("home", "/")
        routes.POST("home", "/")
        assert len(routes) == 2

    def test_build_returns_self_and_freezes(self) -> None:
        routes = RouteCollection.create(App)
        scope = routes.GET("home", "/")
        assert routes.build() is routes
        assert routes.is_built()
        assert scope.get_route().is_frozen()
        with pytest.raises(RouteFrozen):
            scope.ttl(10)

    def test_no_routes_after_build(self) -> None:
        routes = RouteCollection.create(App).GET("home", "/").handler("index").build()
        with pytest.raises(RouteFrozen):
            routes.GET("late", "/late")
        assert len(routes) == 1

    def test_get_routes_is_a_copy(self) -> None:
        routes = RouteCollection.create(App)
        routes.GET("home", "/")
        routes.get_routes().clear()
        assert len(routes) == 1


class TestRouteBuilderScope:
    def test_setters_chain(self) -> None:
        route = RouteCollection.create(App).GET("home", "/").ttl(5).kbps(10).ajax().get_route()
        assert route.get_ttl() == 5
        assert route.get_kbps() == 10
        assert route.get_flags() == frozenset({RouteFlag.AJAX})

    def test_ajax_twice_is_a_noop(self) -> None:
        scope = RouteCollection.create(App).GET("home", "/").ajax()
        scope.ajax()
        assert scope.get_route().get_flags() == frozenset({RouteFlag.AJAX})

    def test_cli_and_sync(self) -> None:
        route = RouteCollection.create(App).GET("job", "/job").cli().sync().get_route()
        assert route.get_flags() == frozenset({RouteFlag.CLI, RouteFlag.SYNC})

    def test_negative_values_fail_immediately(self) -> None:
        scope = RouteCollection.create(App).GET("home", "/")
        with pytest.raises(InvalidArgument):
            scope.ttl(-1)
        with pytest.raises(InvalidArgument):
            scope.kbps(-1)
        assert scope.get_route().get_ttl() == 0

    def test_last_handler_setter_wins(self) -> None:
        route = RouteCollection.create(App).GET("home", "/").handler("index").static_handler("other").get_route()
        assert route.get_handler_kind() is HandlerKind.STATIC_METHOD
        assert route.get_handler_value() == "other"

    def test_dynamic_handler_keeps_expression(self) -> None:
        route = RouteCollection.create(App) \
            .GET("public", "/public/@controller/@action") \
            .dynamic_handler("@controller->@action") \
            .get_route()
        assert route.get_handler_kind() is HandlerKind.RAW_EXPRESSION
        assert route.get_handler() == "@controller->@action"

    def test_callback(self) -> None:
        def ping(request):
            return "pong"

        route = RouteCollection.create(App).GET("ping", "/ping").callback(ping).get_route()
        assert route.get_handler() is ping

    @pytest.mark.parametrize("setter,value", [
        ("handler", ""),
        ("static_handler", ""),
        ("dynamic_handler", ""),
        ("callback", "not callable"),
    ])
    def test_handler_arguments_are_validated(self, setter, value) -> None:
        scope = RouteCollection.create(App).GET("home", "/")
        with pytest.raises(InvalidArgument):
            getattr(scope, setter)(value)
        assert scope.get_route().get_handler() is None

    def test_chain_continues_on_new_route(self) -> None:
        routes = RouteCollection.create(App)
        first = routes.GET("home", "/").handler("index")
        second = first.POST("save", "/save").handler("save").ajax()

        assert second is not first
        assert second.get_route().get_name() == "save"
        assert first.get_route().get_flags() == frozenset()
        assert [r.get_name() for r in routes] == ["home", "save"]

    def test_setters_target_most_recent_route(self) -> None:
        routes = RouteCollection.create(App) \
            .GET("a", "/a").handler("a") \
            .PUT("b", "/b").handler("b").ttl(30) \
            .DELETE("c", "/c").static_handler("c").kbps(8) \
            .build()
        a, b, c = routes.get_routes()
        assert (a.get_ttl(), a.get_kbps()) == (0, 0)
        assert (b.get_ttl(), b.get_kbps()) == (30, 0)
        assert (c.get_ttl(), c.get_kbps()) == (0, 8)
        assert c.get_method() == "DELETE"

    def test_build_returns_collection(self) -> None:
        routes = RouteCollection.create(App).GET("home", "/").handler("index").build()
        assert isinstance(routes, RouteCollection)
        assert routes.is_built()
