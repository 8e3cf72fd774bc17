"""
VoipClient talks to the VOIP provider's HTTP API using httpx.

Every API method is reached through the same endpoint: credentials and the
method name travel either as query parameters (GET) or as multipart form
fields (POST). Responses are JSON objects validated into pydantic models.

A call succeeds only when the HTTP status is 200 and, for responses that
subclass BaseResponse, the decoded status field equals "success".

Attributes:
    RESERVED_PARAMS (tuple): Parameter names the client always sends itself.

Classes:
    VoipClient: Holds endpoint and credentials, performs GET and POST calls.
    ApiGroup: Base class for groups of API methods bound to a client.

Methods:
    VoipClient.call(request, target):
        Sends one request, logs it in debug mode and decodes the JSON body.

    VoipClient.get(method, params, target):
        Calls an API method with query parameters.

    VoipClient.post(method, payload, target):
        Calls an API method with a multipart form payload.

    VoipClient.api(group_cls):
        Binds an ApiGroup subclass to this client.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable, List, Tuple, TypeVar

import httpx

from .errors import (
    ConfigurationError,
    HTTPStatusError,
    MalformedResponseError,
    ReservedParameterError,
    StatusError,
    VoipTransportError,
)
from .forms import FormWriter, write_payload
from .logging_utils import REDACTED, log_event, redact
from .responses import STATUS_SUCCESS, BaseResponse, decode_into

RESERVED_PARAMS = ("api_username", "api_password", "method")

G = TypeVar("G", bound="ApiGroup")


def parse_endpoint(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"invalid endpoint {url!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError(f"invalid endpoint {url!r}: expected an absolute http(s) URL")
    return parsed


class VoipClient:
    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        debug: bool = False,
        *,
        timeout: float = 10,
        logger: logging.Logger | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._endpoint = parse_endpoint(url)
        self._url = url
        self._username = username
        self._password = password
        self._debug = debug
        self._log = logger or logging.getLogger(__name__)
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @property
    def url(self) -> str:
        return self._url

    @property
    def username(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    @property
    def debug(self) -> bool:
        return self._debug

    def __repr__(self) -> str:
        return f"VoipClient(url={self._url!r}, username={self._username!r}, debug={self._debug})"

    def api(self, group_cls: type[G]) -> G:
        return group_cls(self)

    def call(self, request: httpx.Request, target: Any = None) -> Tuple[httpx.Response, Any]:
        """Send ``request`` and decode its JSON body into ``target``.

        HTTP and logical status are left to the caller. The response is
        closed before returning, whether decoding succeeded or not.
        """
        if self._debug:
            self._log_request(request)
        try:
            response = self._client.send(request)
        except httpx.TransportError as e:
            raise VoipTransportError(
                f"{request.method} {self._safe_url(request.url)} failed: {e}") from e
        except httpx.DecodingError as e:
            raise MalformedResponseError(f"undecodable response body: {e}") from e
        try:
            body = response.read()
            if self._debug:
                self._log_response(response, body)
            decoded = self._decode(body, target)
        finally:
            response.close()
        return response, decoded

    def get(self, method: str, params: Mapping[str, Any] | Iterable[Tuple[str, Any]] | None = None,
            target: Any = None) -> Any:
        query = _merge_params(params, self._reserved(method))
        request = self._client.build_request(
            "GET",
            self._endpoint,
            params=query,
            headers={"Content-Type": "application/json"},
        )
        response, decoded = self.call(request, target)
        self._check(method, response, decoded)
        return decoded

    def post(self, method: str, payload: Any = None, target: Any = None) -> Any:
        writer = FormWriter()
        for name, value in self._reserved(method):
            writer.write_field(name, value)
        write_payload(writer, payload, RESERVED_PARAMS)
        request = self._client.build_request("POST", self._endpoint, files=writer.to_files())
        response, decoded = self.call(request, target)
        self._check(method, response, decoded)
        return decoded

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _reserved(self, method: str) -> List[Tuple[str, str]]:
        return [
            ("api_username", self._username),
            ("api_password", self._password),
            ("method", method),
        ]

    def _check(self, method: str, response: httpx.Response, decoded: Any):
        if response.status_code != 200:
            raise HTTPStatusError(
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                method=method,
            )
        if isinstance(decoded, BaseResponse) and decoded.get_status() != STATUS_SUCCESS:
            raise StatusError(decoded.get_status(), method=method)

    @staticmethod
    def _decode(body: bytes, target: Any) -> Any:
        try:
            data = json.loads(body, parse_float=Decimal)
        except ValueError as e:
            raise MalformedResponseError(f"invalid JSON response: {e}") from e
        return decode_into(target, data)

    def _safe_url(self, url: httpx.URL) -> str:
        if "api_password" in url.params:
            url = url.copy_set_param("api_password", REDACTED)
        return str(url)

    def _log_request(self, request: httpx.Request):
        body = request.read()
        log_event(
            self._log,
            "request",
            method=request.method,
            url=self._safe_url(request.url),
            headers=dict(request.headers),
            body=redact(body.decode("utf-8", errors="replace"), self._password),
        )

    def _log_response(self, response: httpx.Response, body: bytes):
        log_event(
            self._log,
            "response",
            status=response.status_code,
            reason=response.reason_phrase,
            headers=dict(response.headers),
            body=body.decode("utf-8", errors="replace"),
        )


class ApiGroup:
    """A set of API methods sharing one client.

    Subclasses pick the method names and response types and delegate to
    ``self.client.get`` / ``self.client.post``.
    """

    def __init__(self, client: VoipClient):
        self.client = client


def _merge_params(
    params: Mapping[str, Any] | Iterable[Tuple[str, Any]] | None,
    reserved: List[Tuple[str, str]],
) -> List[Tuple[str, Any]]:
    if params is None:
        items: List[Tuple[str, Any]] = []
    elif isinstance(params, Mapping):
        items = list(params.items())
    else:
        items = list(params)
    for name, _ in items:
        if name in RESERVED_PARAMS:
            raise ReservedParameterError(f"query parameter {name!r} is set by the client")
    return items + reserved
