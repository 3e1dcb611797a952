import os

import pytest
from pydantic import ValidationError

from horseman import ConfigurationError, Horseman, HorsemanOptions


def test_defaults():
    options = HorsemanOptions()
    assert options.timeout == 5000
    assert options.interval == 50
    assert options.browser == "chromium"
    assert options.headless is True
    assert options.load_images is True
    assert options.switch_to_new_tab is False


@pytest.mark.parametrize("proxy", ["localhost", "localhost:port", ":8080"])
def test_invalid_proxy(proxy):
    with pytest.raises(ValidationError):
        HorsemanOptions(proxy=proxy)


def test_proxy_auth_format():
    assert HorsemanOptions(proxy_auth="user:pass").proxy_auth == "user:pass"
    with pytest.raises(ValidationError):
        HorsemanOptions(proxy_auth="user")


def test_unknown_option_rejected():
    with pytest.raises(ValidationError):
        HorsemanOptions(tiemout=10)


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("HORSEMAN_TIMEOUT", "9000")
    monkeypatch.setenv("HORSEMAN_HEADLESS", "false")
    monkeypatch.setenv("HORSEMAN_BROWSER", "firefox")
    monkeypatch.delenv("HORSEMAN_PROXY", raising=False)

    options = HorsemanOptions.from_env(dotenv_path=str(tmp_path / "missing.env"), interval=75)

    assert options.timeout == 9000
    assert options.headless is False
    assert options.browser == "firefox"
    assert options.interval == 75


def test_from_env_reads_dotenv(monkeypatch, tmp_path):
    monkeypatch.delenv("HORSEMAN_VERBOSE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("HORSEMAN_VERBOSE=2\n")

    try:
        options = HorsemanOptions.from_env(dotenv_path=str(env_file))
    finally:
        os.environ.pop("HORSEMAN_VERBOSE", None)

    assert options.verbose == 2


def test_horseman_keyword_overrides():
    horseman = Horseman(HorsemanOptions(timeout=1000, interval=10), timeout=3000)
    assert horseman.options.timeout == 3000
    assert horseman.options.interval == 10
    assert horseman.initialized is False


def test_horseman_accepts_dict():
    horseman = Horseman({"load_images": False})
    assert horseman.options.load_images is False


def test_horseman_invalid_options():
    with pytest.raises(ConfigurationError) as info:
        Horseman(timeout=-1)
    assert info.value.error_code == "CONFIGURATION_ERROR"


def test_from_env_invalid_value(monkeypatch, tmp_path):
    monkeypatch.setenv("HORSEMAN_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        HorsemanOptions.from_env(dotenv_path=str(tmp_path / "missing.env"))
