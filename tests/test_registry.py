from apidocu.domain.models import (
    CompositeHandler,
    DirectHandler,
    EndpointRule,
    FieldDefinition,
    FieldType,
    HandlerDescriptor,
    HttpMethod,
)
from apidocu.registry.endpoints import EndpointRegistry
from apidocu.registry.resolver import InMemoryHandlerResolver, resolve_rule


def test_registry_orders_paths_and_methods():
    registry = EndpointRegistry()
    registry.add_rule(EndpointRule(path="b", method=HttpMethod.DELETE, handler=DirectHandler(group="g", name="d")))
    registry.add_rule(EndpointRule(path="b", method=HttpMethod.GET, handler=DirectHandler(group="g", name="r")))
    registry.add_rule(EndpointRule(path="a", method=HttpMethod.PUT, handler=CompositeHandler(name="t")))

    assert registry.paths() == ["a", "b"]
    assert [r.method for r in registry.rules_for("b")] == [HttpMethod.GET, HttpMethod.DELETE]
    assert [(r.path, r.handler_name) for r in registry.iter_rules()] == [("a", "t"), ("b", "r"), ("b", "d")]
    assert len(registry) == 3
    assert "a" in registry
    assert "c" not in registry
    assert registry.rules_for("c") == []


def test_registry_last_rule_for_path_and_method_wins():
    registry = EndpointRegistry()
    registry.add_rule(EndpointRule(path="a", method=HttpMethod.GET, handler=DirectHandler(group="g", name="old")))
    registry.add_rule(EndpointRule(path="a", method=HttpMethod.GET, handler=DirectHandler(group="g", name="new")))

    assert len(registry) == 1
    assert registry.get("a", HttpMethod.GET).handler_name == "new"
    assert registry.get("a", HttpMethod.POST) is None


def test_rule_group_name_is_empty_for_composites():
    direct = EndpointRule(path="a", method=HttpMethod.GET, handler=DirectHandler(group="g", name="n"))
    tree = EndpointRule(path="a", method=HttpMethod.GET, handler=CompositeHandler(name="t"))
    assert direct.group_name == "g"
    assert tree.group_name == ""
    assert tree.handler_name == "t"


def test_resolve_rule_dispatches_on_handler_kind():
    field = FieldDefinition(name="x", type=FieldType.INT)
    resolver = InMemoryHandlerResolver()
    resolver.register_blossom("g", "n", HandlerDescriptor(comment="blossom"))
    resolver.register_tree("n", "tree", {"x": field})

    direct = EndpointRule(path="a", method=HttpMethod.GET, handler=DirectHandler(group="g", name="n"))
    tree = EndpointRule(path="a", method=HttpMethod.GET, handler=CompositeHandler(name="n"))
    missing = EndpointRule(path="a", method=HttpMethod.GET, handler=DirectHandler(group="other", name="n"))

    assert resolve_rule(resolver, direct).comment == "blossom"
    tree_descriptor = resolve_rule(resolver, tree)
    assert tree_descriptor.comment == "tree"
    assert tree_descriptor.input_fields == tree_descriptor.output_fields == {"x": field}
    assert resolve_rule(resolver, missing) is None


def test_method_rank_follows_declaration_order():
    assert [m.rank for m in HttpMethod] == [0, 1, 2, 3]
    assert HttpMethod.PUT.rank < HttpMethod.DELETE.rank
