"""Sending HTTP requests described by :class:`~urest.request.Request`."""

from __future__ import annotations

import base64
import functools
import http.client
import logging
import socket
import ssl
import sys
import urllib.error
import urllib.request
from http.cookiejar import CookieJar
from typing import Callable, Optional, Union
from urllib.parse import quote

from .cookie import Cookie
from .errors import ParameterError, TransportError
from .request import CONTENT_TYPE_HEADER, NetworkType, Request, SslVerify
from .response import Response
from .umap import UMap

FORM_URLENCODED = "application/x-www-form-urlencoded"

_CHUNK_SIZE = 16384

WriteBody = Callable[[bytes], object]

logger = logging.getLogger(__name__)


def _escape(text: str) -> str:
    return quote(text, safe="")


def build_url(request: Request) -> str:
    """Return the request URL with the ``map_url`` parameters appended."""
    if request is None or request.http_url is None:
        raise ParameterError("request URL is required")
    url = request.http_url
    has_params = "?" in url
    for key, value in request.map_url.items():
        separator = "&" if has_params else "?"
        has_params = True
        if value is None:
            url += f"{separator}{_escape(key)}"
        else:
            url += f"{separator}{_escape(key)}={_escape(value)}"
    return url


def encode_form(params: UMap) -> str:
    """Encode ``params`` as an ``application/x-www-form-urlencoded`` body."""
    if params is None:
        raise ParameterError("form parameters are required")
    return "&".join(
        _escape(key) if value is None else f"{_escape(key)}={_escape(value)}"
        for key, value in params.items()
    )


def _as_text(line: Union[str, bytes]) -> str:
    if isinstance(line, (bytes, bytearray)):
        return bytes(line).decode("iso-8859-1")
    return line


def parse_header_line(response: Response, line: Union[str, bytes]) -> None:
    """Record one raw response header line in ``response``.

    A ``name: value`` line is stored in the header map; a header seen again
    (ignoring case) gets its values joined by ``", "``. Any other non-blank
    line is taken as the status line and stored as the protocol.
    """
    if response is None:
        raise ParameterError("response is required")
    text = _as_text(line)
    if ":" in text:
        if response.map_header is None:
            return
        key, _, rest = text.lstrip(":").partition(":")
        key = key.strip()
        value = rest.strip()
        if not key:
            return
        if not response.map_header.has_key_case(key):
            response.map_header.put(key, value)
        else:
            combined = f"{response.map_header.get_case(key)}, {value}"
            response.map_header.remove_from_key_case(key)
            response.map_header.put(key, combined)
    elif text.strip():
        response.protocol = text.rstrip()


def parse_cookie_line(response: Response, line: Union[str, bytes]) -> Cookie:
    """Add to ``response`` the cookie described by a tab-separated cookie-jar line.

    Fields are read in the order domain, secure, path, http-only, expires,
    name and value; empty fields are skipped.
    """
    if response is None:
        raise ParameterError("response is required")
    fields = [field for field in _as_text(line).rstrip("\r\n").split("\t") if field]

    def field_at(pos: int) -> Optional[str]:
        return fields[pos] if pos < len(fields) else None

    return response.add_cookie(
        field_at(5),
        field_at(6),
        field_at(4),
        0,
        field_at(0),
        field_at(2),
        field_at(1) == "TRUE",
        field_at(3) == "TRUE",
    )


def _cookie_jar_line(cookie) -> str:
    return "\t".join(
        [
            cookie.domain,
            "TRUE" if cookie.domain_initial_dot else "FALSE",
            cookie.path,
            "TRUE" if cookie.secure else "FALSE",
            str(cookie.expires if cookie.expires is not None else 0),
            cookie.name,
            cookie.value if cookie.value is not None else "",
        ]
    )


def _open_socket(family: int, address, timeout, source_address=None):
    host, port = address
    last_error: Optional[OSError] = None
    for *_, sockaddr in socket.getaddrinfo(host, port, family, socket.SOCK_STREAM):
        try:
            return socket.create_connection((sockaddr[0], sockaddr[1]), timeout, source_address)
        except OSError as exc:
            last_error = exc
    raise last_error or OSError(f"no address of the requested family for {host}")


class _HTTPConnection(http.client.HTTPConnection):
    def __init__(self, *args, family: int = socket.AF_UNSPEC, **kwargs):
        super().__init__(*args, **kwargs)
        self._family = family

    def _create_connection(self, address, timeout, source_address=None):
        if self._family == socket.AF_UNSPEC:
            return socket.create_connection(address, timeout, source_address)
        return _open_socket(self._family, address, timeout, source_address)


class _HTTPSConnection(http.client.HTTPSConnection):
    def __init__(self, *args, family: int = socket.AF_UNSPEC, **kwargs):
        super().__init__(*args, **kwargs)
        self._family = family

    def _create_connection(self, address, timeout, source_address=None):
        if self._family == socket.AF_UNSPEC:
            return socket.create_connection(address, timeout, source_address)
        return _open_socket(self._family, address, timeout, source_address)


class _HTTPHandler(urllib.request.HTTPHandler):
    def __init__(self, family: int):
        super().__init__()
        self._family = family

    def http_open(self, req):
        return self.do_open(functools.partial(_HTTPConnection, family=self._family), req)


class _HTTPSHandler(urllib.request.HTTPSHandler):
    def __init__(self, family: int, context: ssl.SSLContext):
        super().__init__(context=context)
        self._family = family
        self._ssl_context = context

    def https_open(self, req):
        return self.do_open(
            functools.partial(_HTTPSConnection, family=self._family),
            req,
            context=self._ssl_context,
        )


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def _address_family(network_type) -> int:
    kind = NetworkType(network_type)
    if kind & NetworkType.ALL == NetworkType.ALL:
        return socket.AF_UNSPEC
    if kind & NetworkType.IPV6:
        return socket.AF_INET6
    return socket.AF_INET


def _ssl_context(request: Request) -> ssl.SSLContext:
    context = ssl.create_default_context(capath=request.ca_path)
    flags = SslVerify(request.check_server_certificate_flag)
    verify_peer = bool(request.check_server_certificate) and bool(flags & SslVerify.PEER)
    verify_host = verify_peer and bool(flags & SslVerify.HOSTNAME)
    if not verify_host:
        context.check_hostname = False
    if not verify_peer:
        context.verify_mode = ssl.CERT_NONE
    if request.client_cert_file is not None and request.client_key_file is not None:
        context.load_cert_chain(
            request.client_cert_file,
            request.client_key_file,
            request.client_key_password,
        )
    return context


def _headers_for(work: Request) -> dict[str, str]:
    headers = {key: value or "" for key, value in work.map_header.items()}
    if len(work.map_cookie) > 0:
        headers["Cookie"] = "; ".join(
            f"{key}={value if value is not None else ''}" for key, value in work.map_cookie.items()
        )
    if work.auth_basic_user is not None and work.auth_basic_password is not None:
        credentials = f"{work.auth_basic_user}:{work.auth_basic_password}".encode("utf-8")
        headers["Authorization"] = "Basic " + base64.b64encode(credentials).decode("ascii")
    return headers


def _status_line(handle) -> str:
    version = getattr(handle, "version", None)
    if version is None:
        version = getattr(getattr(handle, "fp", None), "version", None)
    protocol = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1"}.get(version, "HTTP/1.1")
    reason = getattr(handle, "reason", "") or ""
    return f"{protocol} {handle.getcode()} {reason}".rstrip()


def _stdout_writer(chunk: bytes) -> None:
    sys.stdout.buffer.write(chunk)


def send_http_streaming_request(
    request: Request,
    response: Optional[Response] = None,
    write_body: Optional[WriteBody] = None,
) -> None:
    """Send ``request`` and fill ``response`` with status, headers and cookies.

    The body is handed chunk by chunk to ``write_body``; without one it goes
    to standard output. Redirects are not followed and HTTP error statuses
    are reported through ``response.status``, not raised.
    """
    if request is None:
        raise ParameterError("request is required")
    if request.http_url is None:
        raise ParameterError("request URL is required")
    writer = write_body if write_body is not None else _stdout_writer

    work = request.duplicate()
    body = work.binary_body
    if len(work.map_post_body) > 0:
        body = encode_form(work.map_post_body).encode("ascii")
        work.map_header.put(CONTENT_TYPE_HEADER, FORM_URLENCODED)
    url = build_url(work)

    try:
        prepared = urllib.request.Request(
            url,
            data=body or None,
            headers=_headers_for(work),
            method=work.http_verb if work.http_verb is not None else "GET",
        )
    except ValueError as exc:
        raise ParameterError(f"invalid request URL: {url}") from exc

    try:
        context = _ssl_context(work)
    except (OSError, ssl.SSLError) as exc:
        raise TransportError(f"cannot set up TLS: {exc}") from exc

    family = _address_family(work.network_type)
    jar = CookieJar()
    handlers = [
        _NoRedirect(),
        urllib.request.HTTPCookieProcessor(jar),
        _HTTPHandler(family),
        _HTTPSHandler(family, context),
    ]
    if work.proxy is not None:
        handlers.append(urllib.request.ProxyHandler({"http": work.proxy, "https": work.proxy}))
    opener = urllib.request.build_opener(*handlers)

    try:
        if work.timeout:
            handle = opener.open(prepared, timeout=work.timeout)
        else:
            handle = opener.open(prepared)
    except urllib.error.HTTPError as exc:
        handle = exc
    except (urllib.error.URLError, OSError, http.client.HTTPException) as exc:
        raise TransportError(f"request to {url} failed: {exc}") from exc

    try:
        if response is not None:
            parse_header_line(response, _status_line(handle))
            for name, value in handle.headers.items():
                parse_header_line(response, f"{name}: {value}")
        if getattr(handle, "fp", True) is not None:
            while True:
                chunk = handle.read(_CHUNK_SIZE)
                if not chunk:
                    break
                writer(chunk)
    except (OSError, http.client.HTTPException) as exc:
        raise TransportError(f"reading the response from {url} failed: {exc}") from exc
    finally:
        handle.close()

    if response is not None:
        response.status = handle.getcode()
        for cookie in jar:
            try:
                parse_cookie_line(response, _cookie_jar_line(cookie))
            except ParameterError:
                logger.error("Error adding cookie %s/%s to response", cookie.name, cookie.value)


def send_http_request(request: Request, response: Optional[Response] = None) -> None:
    """Send ``request`` and store the whole reply, body included, in ``response``."""
    chunks: list[bytes] = []
    send_http_streaming_request(request, response, chunks.append)
    body = b"".join(chunks)
    if response is not None and body:
        response.binary_body = body