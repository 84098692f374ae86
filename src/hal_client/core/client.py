from __future__ import annotations

import copy
import json
import logging
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

from .config import create_client_from_env
from .errors import BadResponseError, HttpClientError
from .factory import DEFAULT_MAX_REDIRECTS, VALID_CONTENT_TYPES, ResourceFactory
from .observability import track_call
from .resource import HalResource

USER_AGENT = "hal-client"

HeaderValue = Union[str, Sequence[str]]
QueryValue = Union[str, Mapping[str, Any]]


def _with_header(headers: httpx.Headers, name: str, value: HeaderValue) -> httpx.Headers:
    """Copy of `headers` where every `name` header is replaced by `value`."""
    values = [value] if isinstance(value, str) else list(value)
    items = [(k, v) for k, v in headers.multi_items() if k.lower() != name.lower()]
    items.extend((name, v) for v in values)
    return httpx.Headers(items)


class HalClient:
    """
    Entry point for navigating a HAL API.
    - Owns the root URL and default headers (immutable; with_* return copies)
    - Sends requests through an httpx.AsyncClient transport
    - Turns 2xx responses into HalResource (or hands back the raw response)
    - Raises BadResponseError for anything else, HttpClientError on transport failure
    """

    def __init__(
        self,
        root_url: Union[str, httpx.URL],
        *,
        http: Optional[httpx.AsyncClient] = None,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        timeout_seconds: float = 10.0,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        logger: Optional[logging.Logger] = None,
    ):
        self._root_url = httpx.URL(str(root_url))
        self.log = logger or logging.getLogger("hal_client.client")
        self.factory = ResourceFactory(
            VALID_CONTENT_TYPES, max_redirects=max_redirects
        )

        default_headers = httpx.Headers(
            {"User-Agent": USER_AGENT, "Accept": ", ".join(VALID_CONTENT_TYPES)}
        )
        for name, value in (headers or {}).items():
            default_headers = _with_header(default_headers, name, value)
        self._headers = default_headers

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "HalClient":
        return create_client_from_env(**kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HalClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Immutable configuration --------------------------------------------- #

    @property
    def root_url(self) -> httpx.URL:
        return self._root_url

    def with_root_url(self, root_url: Union[str, httpx.URL]) -> "HalClient":
        instance = self._clone()
        instance._root_url = httpx.URL(str(root_url))
        return instance

    def get_header(self, name: str) -> list[str]:
        return self._headers.get_list(name)

    def with_header(self, name: str, value: HeaderValue) -> "HalClient":
        instance = self._clone()
        instance._headers = _with_header(self._headers, name, value)
        return instance

    def _clone(self) -> "HalClient":
        # Copies share the transport; only the instance that created it closes it.
        instance = copy.copy(self)
        instance._owns_http = False
        return instance

    # --- Requests ------------------------------------------------------------ #

    async def root(self, **options: Any) -> "HalResource | httpx.Response":
        return await self.request("GET", "", **options)

    async def get(
        self, uri: Union[str, httpx.URL], **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("GET", uri, **options)

    async def post(
        self, uri: Union[str, httpx.URL], **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("POST", uri, **options)

    async def put(
        self, uri: Union[str, httpx.URL], **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("PUT", uri, **options)

    async def delete(
        self, uri: Union[str, httpx.URL], **options: Any
    ) -> "HalResource | httpx.Response":
        return await self.request("DELETE", uri, **options)

    async def request(
        self,
        method: str,
        uri: Union[str, httpx.URL] = "",
        *,
        return_raw_response: bool = False,
        **options: Any,
    ) -> "HalResource | httpx.Response":
        """
        Send one request and classify its response.
        - Raises HttpClientError when the transport itself fails
        - Raises BadResponseError on non-2xx statuses and unusable bodies
        - Returns the httpx.Response untouched when return_raw_response is set
        """
        request = self.create_request(method, uri, **options)

        try:
            with track_call(request.method, str(request.url)) as call:
                response = await self.http.send(request)
                call["status"] = response.status_code
        except Exception as exc:
            raise HttpClientError.create(request, exc) from exc

        return await self._handle_response(request, response, return_raw_response)

    def create_request(
        self,
        method: str,
        uri: Union[str, httpx.URL] = "",
        *,
        version: Optional[str] = None,
        query: Optional[QueryValue] = None,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        body: Any = None,
    ) -> httpx.Request:
        """
        Build the request for `uri` resolved against the root URL.

        `version` is only recorded as the `http_version` request extension.
        httpx picks the protocol from the transport configuration (e.g.
        `http2=True`), so the option does not change what goes on the wire.
        """
        url = self._root_url.join(str(uri))
        if query is not None:
            url = url.copy_merge_params(query)

        request_headers = self._headers
        for name, value in (headers or {}).items():
            request_headers = _with_header(request_headers, name, value)

        content: Optional[Union[str, bytes]] = None
        if body is not None:
            if isinstance(body, (str, bytes)):
                content = body
            else:
                content = json.dumps(body)
                if "Content-Type" not in request_headers:
                    request_headers = _with_header(
                        request_headers, "Content-Type", "application/json"
                    )

        extensions = {}
        if version is not None:
            # httpx negotiates the protocol itself; transports that honour a
            # pinned version read it from here.
            extensions["http_version"] = f"HTTP/{version}".encode("ascii")

        return self.http.build_request(
            method.upper(),
            url,
            headers=request_headers,
            content=content,
            extensions=extensions,
        )

    async def _handle_response(
        self,
        request: httpx.Request,
        response: httpx.Response,
        return_raw_response: bool,
    ) -> "HalResource | httpx.Response":
        if 200 <= response.status_code < 300:
            if return_raw_response:
                return response
            return await self.factory.create_resource(self, request, response)

        resource = await self._diagnostic_resource(request, response)
        raise BadResponseError.create(request, response, resource)

    async def _diagnostic_resource(
        self, request: httpx.Request, response: httpx.Response
    ) -> HalResource:
        try:
            return await self.factory.create_resource(
                self, request, response, ignore_invalid_content_type=True
            )
        except BadResponseError as exc:
            # The status error is what the caller needs; keep an empty resource.
            self.log.debug(
                "hal.unparseable_error_body: %s",
                exc,
                extra={"status": response.status_code, "url": str(request.url)},
            )
            return HalResource.empty(self)


__all__ = ["HalClient", "USER_AGENT"]
