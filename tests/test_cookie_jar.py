import json

import pytest

from horseman import Cookie, CookieFileError
from horseman.utils.cookie_jar import load_cookie_file, save_cookie_file

NETSCAPE = """# Netscape HTTP Cookie File
.example.com\tTRUE\t/\tFALSE\t2000000000\tsid\tabc123
example.org\tFALSE\t/app\tTRUE\t0\ttoken\txyz
"""


def test_missing_file_is_empty(tmp_path):
    assert load_cookie_file(str(tmp_path / "none.json")) == []


def test_save_and_load(tmp_path):
    path = str(tmp_path / "jar.json")
    save_cookie_file(path, [
        Cookie(name="sid", value="abc", domain="example.com", path="/", http_only=True),
    ])

    with open(path, encoding="utf-8") as f:
        stored = json.load(f)
    assert stored == [{"name": "sid", "value": "abc", "domain": "example.com", "path": "/", "httpOnly": True}]

    cookies = load_cookie_file(path)
    assert cookies[0].name == "sid"
    assert cookies[0].http_only is True


def test_load_netscape(tmp_path):
    path = tmp_path / "cookies.txt"
    path.write_text(NETSCAPE)

    cookies = {c.name: c for c in load_cookie_file(str(path))}

    assert cookies["sid"].domain == ".example.com"
    assert cookies["sid"].value == "abc123"
    assert cookies["sid"].expires == 2000000000
    assert cookies["token"].secure is True
    assert cookies["token"].path == "/app"


def test_invalid_json(tmp_path):
    path = tmp_path / "jar.json"
    path.write_text("{not json")
    with pytest.raises(CookieFileError):
        load_cookie_file(str(path))


def test_json_must_be_list(tmp_path):
    path = tmp_path / "jar.json"
    path.write_text('{"name": "a"}')
    with pytest.raises(CookieFileError):
        load_cookie_file(str(path))


def test_empty_file(tmp_path):
    path = tmp_path / "jar.json"
    path.write_text("")
    assert load_cookie_file(str(path)) == []


def test_netscape_session_cookie_has_no_expiry(tmp_path):
    path = tmp_path / "cookies.txt"
    path.write_text(NETSCAPE)

    cookies = {c.name: c for c in load_cookie_file(str(path))}

    assert cookies["token"].expires is None
    assert "expires" not in cookies["token"].to_playwright()
    assert cookies["sid"].to_playwright()["expires"] == 2000000000


def test_invalid_cookie_entry(tmp_path):
    path = tmp_path / "jar.json"
    path.write_text(json.dumps([{"name": "a", "value": "1", "domain": "x.com", "sameSite": "bogus"}]))

    with pytest.raises(CookieFileError) as info:
        load_cookie_file(str(path))

    assert info.value.error_code == "COOKIE_FILE_ERROR"
