"""Cookie jar file: JSON list of cookies, Netscape cookies.txt also read."""

import json
import os
from http.cookiejar import LoadError, MozillaCookieJar
from typing import List, Optional, Union

from filelock import FileLock, Timeout
from pydantic import ValidationError

from ..core.errors import CookieFileError
from ..types import Cookie

LOCK_TIMEOUT = 10

_NETSCAPE_MAGIC = ("# Netscape HTTP Cookie File", "# HTTP Cookie File")


def _lock(path: str) -> FileLock:
    return FileLock(f"{path}.lock", timeout=LOCK_TIMEOUT)


def load_cookie_file(path: str) -> List[Cookie]:
    """
    Read cookies from ``path``.

    A missing file is an empty jar.

    Raises:
        CookieFileError: If the file cannot be parsed or locked
    """
    if not os.path.exists(path):
        return []

    try:
        with _lock(path):
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
    except Timeout as e:
        raise CookieFileError(path, "could not lock cookie file") from e
    except OSError as e:
        raise CookieFileError(path, str(e)) from e

    stripped = content.lstrip()
    if not stripped:
        return []
    if stripped.startswith(_NETSCAPE_MAGIC):
        return _parse_netscape(path)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CookieFileError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise CookieFileError(path, "expected a list of cookies")

    cookies = []
    for entry in data:
        if not isinstance(entry, dict):
            raise CookieFileError(path, f"invalid cookie entry {entry!r}")
        try:
            cookies.append(Cookie.model_validate(entry))
        except ValidationError as e:
            raise CookieFileError(path, f"invalid cookie entry {entry!r}: {e}") from e
    return cookies


def _parse_netscape(path: str) -> List[Cookie]:
    jar = MozillaCookieJar(path)
    try:
        jar.load(ignore_discard=True, ignore_expires=True)
    except (LoadError, OSError) as e:
        raise CookieFileError(path, str(e)) from e

    return [
        Cookie(
            name=c.name,
            value=c.value,
            domain=c.domain,
            path=c.path,
            expires=_expiry(c.expires),
            secure=c.secure,
            http_only=c.has_nonstandard_attr("HttpOnly"),
        )
        for c in jar
    ]


def _expiry(value: Union[str, int, None]) -> Optional[float]:
    """Session cookies carry an empty or zero expiry in cookies.txt."""
    if value is None or value == "":
        return None
    try:
        expires = float(value)
    except ValueError:
        return None
    return expires if expires > 0 else None


def save_cookie_file(path: str, cookies: List[Cookie]) -> None:
    """Write ``cookies`` to ``path`` as a JSON list."""
    data = [cookie.model_dump(by_alias=True, exclude_none=True) for cookie in cookies]
    try:
        with _lock(path):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
    except Timeout as e:
        raise CookieFileError(path, "could not lock cookie file") from e
    except OSError as e:
        raise CookieFileError(path, str(e)) from e
