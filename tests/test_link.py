import pytest
import respx
from httpx import Response

from hal_client.core.client import HalClient
from hal_client.core.errors import InvalidArgumentError
from hal_client.core.link import HalLink, expand_uri_template
from hal_client.core.resource import HalResource


def test_untemplated_link_ignores_variables():
    link = HalLink.from_dict(None, {"href": "/documents/{id}"})
    assert link.get_uri() == "/documents/{id}"
    assert link.get_uri({"id": 7}) == "/documents/{id}"


def test_templated_link_is_expanded():
    link = HalLink.from_dict(
        None, {"href": "/documents/{id}{?page,limit}", "templated": True}
    )
    assert link.get_uri({"id": 7, "page": 2}) == "/documents/7?page=2"
    assert link.get_uri({"id": 7, "page": 2, "limit": 5}) == (
        "/documents/7?page=2&limit=5"
    )


def test_templated_link_with_undefined_variables_drops_them():
    link = HalLink.from_dict(None, {"href": "/search{?q}", "templated": True})
    assert link.get_uri() == "/search"


def test_bare_string_entry_becomes_href():
    link = HalLink.from_dict(None, "/documents")
    assert link.href == "/documents"
    assert link.templated is False


@pytest.mark.parametrize("template", ["/documents/{id", "/documents/id}", "/{a{b}}"])
def test_malformed_template_raises_invalid_argument(template):
    with pytest.raises(InvalidArgumentError):
        expand_uri_template(template, {"id": 1})


def test_malformed_template_only_matters_when_templated():
    link = HalLink.from_dict(None, {"href": "/documents/{id", "templated": False})
    assert link.get_uri({"id": 1}) == "/documents/{id"

    templated = HalLink.from_dict(None, {"href": "/documents/{id", "templated": True})
    with pytest.raises(InvalidArgumentError):
        templated.get_uri({"id": 1})


def test_links_are_values():
    a = HalLink.from_dict(None, {"href": "/a", "title": "A"})
    b = HalLink.from_dict(object(), {"href": "/a", "title": "A"})
    assert a == b
    with pytest.raises(AttributeError):
        a.href = "/b"


@pytest.mark.asyncio
async def test_link_request_expands_and_delegates():
    async with respx.mock:
        route = respx.put("http://propilex.test/documents/4?draft=1").mock(
            return_value=Response(
                200,
                headers={"Content-Type": "application/hal+json"},
                content=b'{"id": 4}',
            )
        )

        async with HalClient("http://propilex.test") as client:
            link = HalLink.from_dict(
                client, {"href": "/documents/{id}{?draft}", "templated": True}
            )
            resource = await link.put({"id": 4, "draft": 1}, body={"title": "x"})

        assert isinstance(resource, HalResource)
        assert resource.get_property("id") == 4
        assert route.called
        sent = route.calls[0].request
        assert sent.content == b'{"title": "x"}'
        assert sent.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_link_convenience_methods_use_their_verb():
    async with respx.mock:
        route = respx.route(url="http://propilex.test/documents/1").mock(
            return_value=Response(204)
        )

        async with HalClient("http://propilex.test") as client:
            link = HalLink.from_dict(client, "/documents/1")
            await link.get()
            await link.post()
            await link.delete()

        assert [c.request.method for c in route.calls] == ["GET", "POST", "DELETE"]


@pytest.mark.asyncio
async def test_unbound_link_cannot_request():
    link = HalLink.from_dict(None, "/documents")
    with pytest.raises(RuntimeError):
        await link.get()
