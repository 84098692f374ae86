from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from . import hal
from .errors import BadResponseError, InvalidArgumentError, ModelValidationError
from .link import HalLink

if TYPE_CHECKING:
    from .client import HalClient

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class HalResource:
    """
    Immutable HAL document: properties, raw `_links` and raw `_embedded`.

    Links and embedded resources are kept in their raw form; every accessor
    builds fresh HalLink / HalResource values from it.
    """

    client: Optional["HalClient"] = field(repr=False, compare=False)
    properties: Dict[Any, Any] = field(default_factory=dict)
    links: Dict[str, Any] = field(default_factory=dict)
    embedded: Dict[str, Any] = field(default_factory=dict)

    def __hash__(self) -> int:
        # Keys only: the stored values may be unhashable containers.
        return hash(
            (frozenset(self.properties), frozenset(self.links), frozenset(self.embedded))
        )

    @classmethod
    def from_dict(cls, client: Optional["HalClient"], data: Any) -> "HalResource":
        properties, links, embedded = hal.split_document(data)
        return cls(client, properties, links, embedded)

    @classmethod
    def empty(cls, client: Optional["HalClient"]) -> "HalResource":
        return cls(client)

    # --- Properties ---------------------------------------------------------- #

    def get_properties(self) -> Dict[Any, Any]:
        return copy.deepcopy(self.properties)

    def has_property(self, name: Any) -> bool:
        return self.properties.get(name) is not None

    def get_property(self, name: Any) -> Any:
        return copy.deepcopy(self.properties.get(name))

    def to_model(self, model: Type[T]) -> T:
        try:
            return model.model_validate(self.properties)
        except ValidationError as exc:
            raise ModelValidationError(
                f"Resource did not match model {model.__name__}: {exc}"
            ) from exc

    # --- Links --------------------------------------------------------------- #

    def has_links(self) -> bool:
        return len(self.links) > 0

    def get_links(self) -> Dict[str, List[HalLink]]:
        """All relations as stored, curie-prefixed ones under their own key."""
        return {
            rel: self._build_links(hal.normalize_entries(raw, hal.link_entry))
            for rel, raw in self.links.items()
        }

    def has_link(self, rel: str) -> bool:
        return hal.resolve_link_rel(self.links, rel) is not None

    def get_link(self, rel: str) -> List[HalLink]:
        return self._build_links(self._link_data(rel))

    def get_first_link(self, rel: str) -> Optional[HalLink]:
        data = self._link_data(rel)
        if not data:
            return None
        return HalLink.from_dict(self.client, data[0])

    def _link_data(self, rel: str) -> List[Dict[Any, Any]]:
        resolved = hal.resolve_link_rel(self.links, rel)
        if resolved is None:
            raise InvalidArgumentError(f"Unknown link {json.dumps(rel)}.")
        return hal.normalize_entries(self.links[resolved], hal.link_entry)

    def _build_links(self, data: List[Dict[Any, Any]]) -> List[HalLink]:
        return [HalLink.from_dict(self.client, entry) for entry in data]

    # --- Embedded resources -------------------------------------------------- #

    def has_resources(self) -> bool:
        return len(self.embedded) > 0

    def get_resources(self) -> Dict[str, List["HalResource"]]:
        return {
            name: self._build_resources(
                hal.normalize_entries(raw, hal.resource_entry)
            )
            for name, raw in self.embedded.items()
        }

    def has_resource(self, name: str) -> bool:
        return self.embedded.get(name) is not None

    def get_resource(self, name: str) -> List["HalResource"]:
        return self._build_resources(self._resource_data(name))

    def get_first_resource(self, name: str) -> Optional["HalResource"]:
        data = self._resource_data(name)
        if not data:
            return None
        return HalResource.from_dict(self.client, data[0])

    def _resource_data(self, name: str) -> List[Dict[Any, Any]]:
        # Exact key match only: embedded names are not curie-resolved.
        if self.embedded.get(name) is None:
            raise InvalidArgumentError(f"Unknown resource {json.dumps(name)}.")
        return hal.normalize_entries(self.embedded[name], hal.resource_entry)

    def _build_resources(self, data: List[Dict[Any, Any]]) -> List["HalResource"]:
        return [HalResource.from_dict(self.client, entry) for entry in data]

    # --- Navigation ---------------------------------------------------------- #

    async def get(self, **options: Any) -> "HalResource | httpx.Response":
        return await self.request("GET", **options)

    async def post(self, **options: Any) -> "HalResource | httpx.Response":
        return await self.request("POST", **options)

    async def put(self, **options: Any) -> "HalResource | httpx.Response":
        return await self.request("PUT", **options)

    async def delete(self, **options: Any) -> "HalResource | httpx.Response":
        return await self.request("DELETE", **options)

    async def request(self, method: str, **options: Any) -> "HalResource | httpx.Response":
        link = self.get_first_link("self") if self.has_link("self") else None
        if link is None:
            raise BadResponseError(
                "Response links does not contain key 'self'.", resource=self
            )
        return await link.request(method, None, **options)


__all__ = ["HalResource"]
