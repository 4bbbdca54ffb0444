from apidocu.config import Settings
from apidocu.domain.models import DirectHandler, HttpMethod
from apidocu.registry.endpoints import EndpointRegistry
from apidocu.registry.resolver import InMemoryHandlerResolver
from apidocu.render.formats import decode_document
from apidocu.render.rst import render
from apidocu.tasks import generate_api_docu
from apidocu.tasks.generate_api_docu import GenerateApiDocu, register


def _task(component: str = "misaka") -> GenerateApiDocu:
    registry = EndpointRegistry()
    resolver = InMemoryHandlerResolver()
    register(registry, resolver)
    return GenerateApiDocu(Settings(component_name=component), registry, resolver)


def test_register_adds_documentation_route():
    registry = EndpointRegistry()
    resolver = InMemoryHandlerResolver()
    rule = register(registry, resolver)

    assert rule.path == "v1/documentation/api"
    assert rule.method is HttpMethod.GET
    assert isinstance(rule.handler, DirectHandler)
    assert registry.get("v1/documentation/api", HttpMethod.GET) == rule

    descriptor = resolver.resolve("-", "get_api_documentation")
    assert descriptor is not None
    assert set(descriptor.input_fields) == {"type"}
    assert set(descriptor.output_fields) == {"documentation"}


def test_declared_type_field_defaults_to_pdf():
    field = GenerateApiDocu.input_fields["type"]
    assert field.is_required is False
    assert field.default_value == "pdf"


def test_run_task_defaults_to_rst_based_output():
    task = _task()
    out = task.run_task({})

    assert set(out) == {"documentation"}
    text = decode_document(out["documentation"])
    assert text == render("misaka", task.registry, task.resolver)
    assert text.startswith("MISAKA\n======\n")


def test_run_task_md_returns_empty_documentation():
    out = _task().run_task({"type": "md"})
    assert out == {"documentation": ""}


def test_run_task_omitted_type_follows_declared_default():
    registry = EndpointRegistry()
    resolver = InMemoryHandlerResolver()
    register(registry, resolver)
    task = GenerateApiDocu(Settings(default_output_type="md"), registry, resolver)

    out = task.run_task({})
    assert GenerateApiDocu.input_fields["type"].default_value == "pdf"
    assert decode_document(out["documentation"]) == render("misaka", registry, resolver)
    assert task.run_task({"type": "md"}) == {"documentation": ""}


def test_run_task_never_raises(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(generate_api_docu, "generate_documentation", broken)
    assert _task().run_task({"type": "rst"}) == {"documentation": ""}
