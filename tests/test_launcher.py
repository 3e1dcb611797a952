from unittest.mock import MagicMock

from horseman import HorsemanOptions, Viewport
from horseman.core.launcher import basic_auth_header, build_context_options, build_launch_options
from horseman.utils.logger import HorsemanLogger


def test_minimal_launch_options():
    assert build_launch_options(HorsemanOptions()) == {"headless": True}


def test_proxy_with_auth():
    options = HorsemanOptions(proxy="10.0.0.1:3128", proxy_type="socks5", proxy_auth="bob:secret")
    launch = build_launch_options(options)
    assert launch["proxy"] == {
        "server": "socks5://10.0.0.1:3128",
        "username": "bob",
        "password": "secret",
    }


def test_proxy_type_none_disables_proxy():
    options = HorsemanOptions(proxy="10.0.0.1:3128", proxy_type="none")
    assert "proxy" not in build_launch_options(options)


def test_chromium_switches():
    options = HorsemanOptions(
        debug_port=9222,
        disk_cache=True,
        disk_cache_path="/tmp/cache",
        web_security=False,
        ssl_protocol="tlsv1",
        browser_args=["--mute-audio"],
    )
    args = build_launch_options(options)["args"]
    assert args == [
        "--mute-audio",
        "--remote-debugging-port=9222",
        "--disk-cache-dir=/tmp/cache",
        "--disable-web-security",
        "--ssl-version-min=tls1",
    ]


def test_chromium_switches_skipped_for_firefox():
    logger = HorsemanLogger(MagicMock(), verbose=3)
    options = HorsemanOptions(browser="firefox", debug_port=9222)

    launch = build_launch_options(options, logger)

    assert "args" not in launch
    logger.logger.warning.assert_called_once()


def test_launch_options_merged_last():
    options = HorsemanOptions(headless=True, launch_options={"headless": False, "slow_mo": 50})
    launch = build_launch_options(options)
    assert launch["headless"] is False
    assert launch["slow_mo"] == 50


def test_context_options():
    options = HorsemanOptions(ignore_ssl_errors=True, web_security=False)
    context = build_context_options(
        options,
        user_agent="Agent/1.0",
        headers={"X-A": "1"},
        credentials={"username": "u", "password": "p"},
        viewport=Viewport(width=800, height=600),
    )
    assert context == {
        "viewport": {"width": 800, "height": 600},
        "ignore_https_errors": True,
        "bypass_csp": True,
        "user_agent": "Agent/1.0",
        "extra_http_headers": {"X-A": "1"},
        "http_credentials": {"username": "u", "password": "p"},
    }


def test_context_options_default_viewport():
    context = build_context_options(HorsemanOptions(viewport_width=1024, viewport_height=768))
    assert context["viewport"] == {"width": 1024, "height": 768}
    assert "user_agent" not in context


def test_basic_auth_header():
    assert basic_auth_header("Aladdin", "open sesame") == "Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=="


def test_disk_cache_dir():
    options = HorsemanOptions(disk_cache=True)

    assert "args" not in build_launch_options(options)
    args = build_launch_options(options, cache_dir="/tmp/horseman-cache")["args"]
    assert args == ["--disk-cache-dir=/tmp/horseman-cache"]
