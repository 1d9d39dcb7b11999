# urest

Small, dependency-free building blocks for REST services and clients.

## What is inside

- `urest.umap.UMap`: an ordered string-keyed map whose values are stored as
  bytes and read back as text or bytes. It has case-insensitive lookups
  (`get_case`, `has_key_case`, `get_case_length`), lookups and removals by
  value (`has_value`, `remove_from_value`, and their `_binary` and `_case`
  forms), removal by key or position, `copy`, `merge`, and partial binary
  writes at an offset with `put_binary`.
- `urest.urlcode`: `url_decode` for percent- and plus-encoded text, and
  `split_url`, which breaks a prefix and a path into their non-empty
  segments, leaving out path segments that start with `?`.
- `urest.routing`: the `Endpoint` dataclass, `endpoint_match` to find every
  endpoint that answers a method and URL (copies, sorted by priority),
  `url_format_match` for the segment test itself, and `parse_url` to pull
  `:name` and `@name` parameters out of a path into a `UMap`.
- `urest.request.Request`: a request with URL, verb, proxy, timeout, TLS
  options (`SslVerify`), IP family (`NetworkType`), basic-auth credentials,
  URL, header, cookie and form parameter maps, and string, binary, empty or
  JSON bodies.
- `urest.response.Response`: status, headers, cookies, and string, binary,
  empty, JSON or stream bodies.
- `urest.cookie.Cookie` and `SameSite`: a cookie whose `header_value()`
  renders a `Set-Cookie` value with Expires, Max-Age, Domain, Path, Secure,
  HttpOnly and SameSite attributes.
- `urest.headers`: `header_items` and `cookie_headers` turn a response's
  header map and cookies into `(name, value)` pairs.
- `urest.http_client`: `send_http_request` and
  `send_http_streaming_request` send a `Request` with the standard library
  and fill a `Response`; `build_url`, `encode_form`, `parse_header_line`
  and `parse_cookie_line` are the steps they are built from.

Errors are raised as subclasses of `urest.errors.UlfiusError`:
`ParameterError` for bad arguments, `NotFoundError` when nothing matches,
and `TransportError` when a network exchange fails.

## Installing

```
pip install .
```

## A quick look

```python
from urest.umap import UMap
from urest.urlcode import url_decode, split_url

headers = UMap()
headers.put("Content-Type", "application/json")
headers.get_case("content-type")        # 'application/json'
"Content-Type" in headers               # True

url_decode("a%20b+c")                   # 'a b c'
split_url("/api", "/users/42/?x=1")     # ['api', 'users', '42']
```

Matching an incoming call against endpoints and reading its parameters:

```python
from urest.routing import Endpoint, endpoint_match, parse_url
from urest.umap import UMap

endpoints = [
    Endpoint("GET", "/api", "/users/:id", priority=1),
    Endpoint("*", "/api", "/*", priority=2),
]

for endpoint in endpoint_match("GET", "/api/users/42", endpoints):
    params = UMap()
    parse_url("/api/users/42", endpoint, params, True)
    params.get("id")                    # '42' for the first endpoint
```

A URL format may use `:name` or `@name` for a parameter segment, and a
final `*` to accept any remaining segments. A method of `*` matches every
HTTP verb. A parameter captured more than once has its values joined by
commas.

Building a response:

```python
from urest.headers import cookie_headers, header_items
from urest.response import Response

response = Response()
response.set_json_body(200, {"id": 42})
response.add_header("Cache-Control", "no-store")
response.add_cookie("theme", "dark", path="/", http_only=True)

header_items(response.map_header)
cookie_headers(response)    # [('Set-Cookie', 'theme=dark; Path=/; HttpOnly')]
```

Sending a request:

```python
from urest.http_client import send_http_request
from urest.request import Request
from urest.response import Response

request = Request(http_verb="GET", http_url="https://www.example.com/")
request.map_url.put("q", "search terms")
response = Response()
send_http_request(request, response)
response.status, response.protocol, response.binary_body
```

Redirects are not followed, and HTTP error statuses are reported in
`response.status` rather than raised.

## What it does not do

- There is no HTTP server here: endpoints can be matched and requests and
  responses built, but nothing listens for connections or dispatches to
  `Endpoint.callback`.
- There is no websocket support and no e-mail sending.
- There is no command-line program; everything is used from Python.

## Running the tests

```
pip install .[test]
pytest
```