from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from .core.resource import HalResource


def _string_keys(data: Mapping[Any, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if isinstance(k, str)}


class LinkObject(BaseModel):
    """
    One raw HAL link entry.

    Servers are sloppy about link objects, so values of the wrong JSON type
    fall back to their defaults instead of failing validation.
    """

    href: str = ""
    templated: bool = False
    type: Optional[str] = None
    deprecation: Optional[str] = None
    name: Optional[str] = None
    profile: Optional[str] = None
    title: Optional[str] = None
    hreflang: Optional[str] = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("href", mode="before")
    @classmethod
    def _href_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("templated", mode="before")
    @classmethod
    def _strict_bool(cls, value: Any) -> bool:
        return value if isinstance(value, bool) else False

    @field_validator(
        "type", "deprecation", "name", "profile", "title", "hreflang", mode="before"
    )
    @classmethod
    def _string_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @classmethod
    def parse(cls, entry: Union[str, Mapping[Any, Any]]) -> "LinkObject":
        """Parse a bare href string or a link object."""
        if isinstance(entry, str):
            return cls(href=entry)
        return cls.model_validate(_string_keys(entry))


class VndError(BaseModel):
    """Error document as served with application/vnd.error+json."""

    message: Optional[str] = None
    logref: Optional[Union[str, int]] = None
    path: Optional[str] = None
    errors: List["VndError"] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_resource(cls, resource: "HalResource") -> "VndError":
        nested: List[VndError] = []
        if resource.has_resource("errors"):
            nested = [cls.from_resource(r) for r in resource.get_resource("errors")]
        data = _string_keys(resource.get_properties())
        data["errors"] = nested
        return cls.model_validate(data)


__all__ = ["LinkObject", "VndError"]
