from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

import httpx

from . import hal
from .context import following_redirect, get_redirect_depth
from .errors import BadResponseError
from .resource import HalResource

if TYPE_CHECKING:
    from .client import HalClient

VALID_CONTENT_TYPES = (
    "application/hal+json",
    "application/json",
    "application/vnd.error+json",
)

DEFAULT_MAX_REDIRECTS = 5


class ResourceFactory:
    """
    Turns one HTTP response into a HalResource.

    - 204 -> empty resource, body not read
    - 201 with empty body and a Location header -> GET the Location instead
    - invalid Content-Type -> BadResponseError (or an empty resource when
      ignore_invalid_content_type is set, used for error diagnostics)
    - empty body -> empty resource
    - malformed JSON -> BadResponseError
    - otherwise -> HalResource built from the decoded body

    Status codes outside 2xx are the client's concern, not this class's.
    """

    def __init__(
        self,
        valid_content_types: Sequence[str] = VALID_CONTENT_TYPES,
        *,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        logger: Optional[logging.Logger] = None,
    ):
        self.valid_content_types = tuple(valid_content_types)
        self.max_redirects = max_redirects
        self.log = logger or logging.getLogger("hal_client.core.factory")

    async def create_resource(
        self,
        client: "HalClient",
        request: httpx.Request,
        response: httpx.Response,
        ignore_invalid_content_type: bool = False,
    ) -> HalResource:
        if response.status_code == 204:
            return HalResource.empty(client)

        body = (await self._fetch_body(client, request, response)).strip()

        locations = response.headers.get_list("Location")
        if body == "" and response.status_code == 201 and locations:
            return await self._follow_location(
                client, request, response, locations[0]
            )

        if not self.is_valid_content_type(response):
            return self._handle_invalid_content_type(
                client, request, response, ignore_invalid_content_type
            )

        if body == "":
            return HalResource.empty(client)

        data = self._decode_body(client, request, response, body)
        return HalResource.from_dict(client, data)

    def is_valid_content_type(self, response: httpx.Response) -> bool:
        return hal.is_valid_content_type(
            response.headers.get_list("Content-Type"), self.valid_content_types
        )

    async def _follow_location(
        self,
        client: "HalClient",
        request: httpx.Request,
        response: httpx.Response,
        location: str,
    ) -> HalResource:
        if get_redirect_depth() >= self.max_redirects:
            raise BadResponseError(
                "Too many redirects while following Location header "
                f"(limit {self.max_redirects}).",
                request=request,
                response=response,
                resource=HalResource.empty(client),
            )

        target = str(request.url.join(location))
        with following_redirect() as depth:
            self.log.debug(
                "hal.follow_location",
                extra={"url": target, "status": response.status_code, "hops": depth},
            )
            resource = await client.request("GET", target)
        return resource

    def _handle_invalid_content_type(
        self,
        client: "HalClient",
        request: httpx.Request,
        response: httpx.Response,
        ignore_invalid_content_type: bool,
    ) -> HalResource:
        if ignore_invalid_content_type:
            return HalResource.empty(client)

        types = response.headers.get_list("Content-Type") or ["none"]
        raise BadResponseError(
            "Request did not return a valid content type. "
            f"Returned content type: {', '.join(types)}.",
            request=request,
            response=response,
            resource=HalResource.empty(client),
        )

    async def _fetch_body(
        self, client: "HalClient", request: httpx.Request, response: httpx.Response
    ) -> str:
        try:
            await response.aread()
            return response.text
        except Exception as exc:
            raise BadResponseError(
                f"Error getting response body: {exc}.",
                request=request,
                response=response,
                resource=HalResource.empty(client),
            ) from exc

    def _decode_body(
        self,
        client: "HalClient",
        request: httpx.Request,
        response: httpx.Response,
        body: str,
    ) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            raise BadResponseError(
                f"JSON parse error: {exc}.",
                request=request,
                response=response,
                resource=HalResource.empty(client),
            ) from exc


__all__ = ["ResourceFactory", "VALID_CONTENT_TYPES", "DEFAULT_MAX_REDIRECTS"]
