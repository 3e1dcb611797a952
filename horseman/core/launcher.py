"""Translation of HorsemanOptions into Playwright launch and context options."""

import base64
from typing import Optional, Dict, Any, List

from ..types import HorsemanOptions, Viewport
from ..utils.logger import HorsemanLogger


# Switches only Chromium understands
_SSL_VERSION_SWITCHES = {
    "tlsv1": "--ssl-version-min=tls1",
}


def build_launch_options(
    options: HorsemanOptions,
    logger: Optional[HorsemanLogger] = None,
    cache_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build keyword arguments for BrowserType.launch().

    Args:
        options: Session options
        logger: Optional logger for options the chosen browser ignores
        cache_dir: Disk cache directory used when disk_cache_path is unset

    Returns:
        Launch keyword arguments
    """
    launch: Dict[str, Any] = {"headless": options.headless}
    args: List[str] = list(options.browser_args)
    chromium = options.browser == "chromium"

    if options.executable_path:
        launch["executable_path"] = options.executable_path

    if options.proxy and options.proxy_type != "none":
        proxy: Dict[str, str] = {"server": f"{options.proxy_type}://{options.proxy}"}
        if options.proxy_auth:
            username, _, password = options.proxy_auth.partition(":")
            proxy["username"] = username
            proxy["password"] = password
        launch["proxy"] = proxy

    chromium_args: List[str] = []
    if options.debug_port:
        chromium_args.append(f"--remote-debugging-port={options.debug_port}")
    cache_dir = options.disk_cache_path or cache_dir
    if options.disk_cache and cache_dir:
        chromium_args.append(f"--disk-cache-dir={cache_dir}")
    if not options.web_security:
        chromium_args.append("--disable-web-security")
    if options.ssl_protocol in _SSL_VERSION_SWITCHES:
        chromium_args.append(_SSL_VERSION_SWITCHES[options.ssl_protocol])
    elif options.ssl_protocol in ("sslv2", "sslv3") and logger:
        logger.warn(
            "launcher:ssl",
            "SSL protocol is no longer supported by browsers, using defaults",
            ssl_protocol=options.ssl_protocol,
        )

    if chromium:
        args.extend(chromium_args)
    elif chromium_args and logger:
        logger.warn(
            "launcher:args",
            "Ignoring chromium-only options",
            browser=options.browser,
            args=chromium_args,
        )

    if args:
        launch["args"] = args

    launch.update(options.launch_options)
    return launch


def basic_auth_header(user: str, password: str) -> str:
    """Value for an Authorization header using basic authentication."""
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def build_context_options(
    options: HorsemanOptions,
    user_agent: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    credentials: Optional[Dict[str, str]] = None,
    viewport: Optional[Viewport] = None,
) -> Dict[str, Any]:
    """
    Build keyword arguments for Browser.new_context().

    Args:
        options: Session options
        user_agent: User agent set before launch
        headers: Extra HTTP headers set before launch
        credentials: Basic-auth credentials set before launch
        viewport: Viewport set before launch

    Returns:
        Context keyword arguments
    """
    size = viewport or Viewport(width=options.viewport_width, height=options.viewport_height)
    context: Dict[str, Any] = {
        "viewport": {"width": size.width, "height": size.height},
        "ignore_https_errors": options.ignore_ssl_errors,
        "bypass_csp": not options.web_security,
    }
    if user_agent:
        context["user_agent"] = user_agent
    if headers:
        context["extra_http_headers"] = dict(headers)
    if credentials:
        context["http_credentials"] = dict(credentials)
    return context
