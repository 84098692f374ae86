from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import httpx

if TYPE_CHECKING:
    from .resource import HalResource


class HalClientError(Exception):
    """Base error for client failures."""


class InvalidArgumentError(HalClientError, ValueError):
    """Unknown link relation / embedded resource, or an unexpandable URI template."""


class HttpClientError(HalClientError):
    """The transport raised while sending a request (connection, DNS, TLS...)."""

    def __init__(self, message: str, *, request: httpx.Request):
        super().__init__(message)
        self.request = request

    @classmethod
    def create(
        cls,
        request: httpx.Request,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> "HttpClientError":
        if not message:
            message = "Exception thrown by the http client while sending request."
            if cause is not None:
                message = (
                    "Exception thrown by the http client while sending request: "
                    f"{cause}."
                )
        return cls(message, request=request)


class BadResponseError(HalClientError):
    """
    A response that cannot be turned into a usable resource.

    Carries the request, the response and a best-effort resource built from
    the response body so callers can inspect partial data on failure.
    """

    def __init__(
        self,
        message: str,
        *,
        request: Optional[httpx.Request] = None,
        response: Optional[httpx.Response] = None,
        resource: "HalResource | httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.request = request
        self.response = response
        self.resource = resource
        self.status_code = response.status_code if response is not None else 0

    @classmethod
    def create(
        cls,
        request: httpx.Request,
        response: httpx.Response,
        resource: "HalResource | httpx.Response | None",
        message: Optional[str] = None,
    ) -> "BadResponseError":
        code = response.status_code
        if not message:
            if 400 <= code < 500:
                message = "Client error"
            elif 500 <= code < 600:
                message = "Server error"
            else:
                message = "Unsuccessful response"

        target = request.url.raw_path.decode("ascii")
        message = (
            f"{message} [url] {target} [http method] {request.method} "
            f"[status code] {code} [reason phrase] {response.reason_phrase}."
        )
        return cls(message, request=request, response=response, resource=resource)

    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600


class ModelValidationError(HalClientError):
    pass


__all__ = [
    "HalClientError",
    "InvalidArgumentError",
    "HttpClientError",
    "BadResponseError",
    "ModelValidationError",
]
