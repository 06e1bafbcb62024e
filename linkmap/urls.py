"""
URL validation and canonicalization.

`canonicalize_url` is the only gate between user input and the store: it
either returns the canonical string that gets stored (and later resolved
verbatim) or raises `InvalidInput`.

Canonical form
--------------
Parsing is delegated to pydantic's `AnyUrl` (pydantic-core, backed by the
WHATWG-conformant Rust `url` crate); the stored value is `str()` of the
parsed URL. That means, among other things:

- surrounding whitespace is trimmed, tabs/newlines inside are dropped;
- scheme and host are lowercased, non-ASCII hosts become punycode,
  numeric IPv4 forms are normalized (http://0x7f.1/ -> http://127.0.0.1/);
- special schemes (http, https, ws, wss, ftp) get "/" for an empty path,
  lose their default port, accept backslashes as slashes and tolerate
  missing or extra slashes after the colon (https:example.com ->
  https://example.com/);
- "." and ".." path segments are resolved;
- unsafe characters in path, query and fragment are percent-encoded (UTF-8).

On top of the parser, special schemes must carry a non-empty host.
Only syntax is checked. Whether the target exists or responds is not.
"""

from pydantic import AnyUrl, TypeAdapter, ValidationError

from linkmap.errors import InvalidInput

SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}

_url_adapter = TypeAdapter(AnyUrl)


def canonicalize_url(raw: str) -> str:
    """
    Validate `raw` as an absolute URL and return its canonical form.

    Raises:
        InvalidInput: if `raw` is not a syntactically well-formed absolute URL.
            The parser's own message is not carried over.
    """
    if not isinstance(raw, str):
        raise InvalidInput("URL must be a string")

    try:
        url = _url_adapter.validate_python(raw)
    except ValidationError as exc:
        raise InvalidInput(f"unparseable URL ({exc.error_count()} error(s))") from None

    if url.scheme in SPECIAL_SCHEMES and not url.host:
        raise InvalidInput(f"{url.scheme} URL needs a host")
    return str(url)
