"""Session configuration for Horseman."""

import os
from typing import Optional, Dict, Any, List, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator

from ..core.errors import ConfigurationError


DEFAULT_JQUERY_URL = "https://code.jquery.com/jquery-3.7.1.min.js"

# Environment variable -> option name, read by HorsemanOptions.from_env()
ENV_VARIABLES: Dict[str, str] = {
    "HORSEMAN_TIMEOUT": "timeout",
    "HORSEMAN_INTERVAL": "interval",
    "HORSEMAN_BROWSER": "browser",
    "HORSEMAN_HEADLESS": "headless",
    "HORSEMAN_LOAD_IMAGES": "load_images",
    "HORSEMAN_PROXY": "proxy",
    "HORSEMAN_PROXY_TYPE": "proxy_type",
    "HORSEMAN_PROXY_AUTH": "proxy_auth",
    "HORSEMAN_EXECUTABLE_PATH": "executable_path",
    "HORSEMAN_COOKIES_FILE": "cookies_file",
    "HORSEMAN_DEBUG_PORT": "debug_port",
    "HORSEMAN_VERBOSE": "verbose",
}


class HorsemanOptions(BaseModel):
    """Options for creating a Horseman session."""
    model_config = ConfigDict(extra="forbid")

    timeout: int = Field(default=5000, gt=0)  # page loads and waits, ms
    interval: int = Field(default=50, gt=0)  # wait polling, ms
    load_images: bool = True
    switch_to_new_tab: bool = False
    disk_cache: bool = False
    disk_cache_path: Optional[str] = None
    cookies_file: Optional[str] = None
    ignore_ssl_errors: bool = False
    ssl_protocol: Literal["sslv3", "sslv2", "tlsv1", "any"] = "any"
    web_security: bool = True
    inject_jquery: bool = False
    jquery_url: str = DEFAULT_JQUERY_URL
    inject_scripts: List[str] = Field(default_factory=list)
    proxy: Optional[str] = None
    proxy_type: Literal["http", "socks5", "none"] = "http"
    proxy_auth: Optional[str] = None
    executable_path: Optional[str] = None
    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    browser_args: List[str] = Field(default_factory=list)
    launch_options: Dict[str, Any] = Field(default_factory=dict)
    debug_port: Optional[int] = Field(default=None, gt=0, lt=65536)
    viewport_width: int = Field(default=1280, gt=0)
    viewport_height: int = Field(default=720, gt=0)
    verbose: int = Field(default=0, ge=0, le=3)

    @field_validator("proxy")
    @classmethod
    def _check_proxy(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError('proxy must be in format "address:port"')
        return v

    @field_validator("proxy_auth")
    @classmethod
    def _check_proxy_auth(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and ":" not in v:
            raise ValueError('proxy_auth must be in format "user:pass"')
        return v

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: Any) -> 'HorsemanOptions':
        """
        Build options from HORSEMAN_* environment variables.

        A ``.env`` file is loaded first (existing variables win). Keyword
        arguments override anything read from the environment.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        load_dotenv(dotenv_path)
        values: Dict[str, Any] = {}
        for env_name, field_name in ENV_VARIABLES.items():
            raw = os.getenv(env_name)
            if raw is not None and raw != "":
                values[field_name] = raw
        values.update(overrides)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
