from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

import httpx
from uritemplate import URITemplate

from hal_client.models import LinkObject

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from .client import HalClient
    from .resource import HalResource

_EXPRESSION_RE = re.compile(r"\{[^{}]+\}")


def expand_uri_template(
    template: str, variables: Optional[Mapping[str, Any]] = None
) -> str:
    """RFC 6570 expansion; undefined variables expand to nothing."""
    leftover = _EXPRESSION_RE.sub("", template)
    if "{" in leftover or "}" in leftover:
        raise InvalidArgumentError(f"Malformed URI template {template!r}.")

    try:
        return URITemplate(template).expand(dict(variables or {}))
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(
            f"Cannot expand URI template {template!r}: {exc}"
        ) from exc


@dataclass(frozen=True)
class HalLink:
    client: Optional["HalClient"] = field(repr=False, compare=False)
    href: str = ""
    templated: bool = False
    type: Optional[str] = None
    deprecation: Optional[str] = None
    name: Optional[str] = None
    profile: Optional[str] = None
    title: Optional[str] = None
    hreflang: Optional[str] = None

    @classmethod
    def from_dict(
        cls, client: Optional["HalClient"], entry: Union[str, Mapping[Any, Any]]
    ) -> "HalLink":
        link = LinkObject.parse(entry)
        return cls(client, **link.model_dump())

    def get_uri(self, variables: Optional[Mapping[str, Any]] = None) -> str:
        # Untemplated links ignore any variables they are given.
        if self.templated:
            return expand_uri_template(self.href, variables)
        return self.href

    async def get(
        self, variables: Optional[Mapping[str, Any]] = None, **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("GET", variables, **options)

    async def post(
        self, variables: Optional[Mapping[str, Any]] = None, **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("POST", variables, **options)

    async def put(
        self, variables: Optional[Mapping[str, Any]] = None, **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("PUT", variables, **options)

    async def delete(
        self, variables: Optional[Mapping[str, Any]] = None, **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("DELETE", variables, **options)

    async def request(
        self,
        method: str,
        variables: Optional[Mapping[str, Any]] = None,
        **options: Any,
    ) -> "HalResource | httpx.Response":
        if self.client is None:
            raise RuntimeError("HalLink is not bound to a HalClient.")
        return await self.client.request(method, self.get_uri(variables), **options)


__all__ = ["HalLink", "expand_uri_template"]
