import pydantic
import pytest

from delight_client.client.config import DelightConfig
from delight_client.config.settings import DEFAULT_BASE_URL, load_settings
from delight_client.transport import HttpxTransport


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in (
        "DELIGHT_BASE_URL",
        "DELIGHT_CONFIG_FILE",
        "DELIGHT_MAX_POLL_ATTEMPTS",
        "DELIGHT_POLL_INTERVAL",
        "DELIGHT_HTTP_TIMEOUT",
        "DELIGHT_LOG_DIR",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    s = load_settings()
    assert s.base_url == DEFAULT_BASE_URL == "https://qa.delight.global"
    assert s.max_poll_attempts == 30
    assert s.poll_interval == 1.0
    assert s.log_dir is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DELIGHT_BASE_URL", "https://api.delight.test/")
    monkeypatch.setenv("DELIGHT_MAX_POLL_ATTEMPTS", "60")
    s = load_settings()
    assert s.base_url == "https://api.delight.test"
    assert s.max_poll_attempts == 60


def test_yaml_config_file(monkeypatch, tmp_path):
    cfg = tmp_path / "delight.yaml"
    cfg.write_text("delight:\n  base_url: https://yaml.delight.test\n  poll_interval: 0.5\n", encoding="utf-8")
    monkeypatch.setenv("DELIGHT_CONFIG_FILE", str(cfg))
    s = load_settings()
    assert s.base_url == "https://yaml.delight.test"
    assert s.poll_interval == 0.5


def test_env_beats_yaml(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text("base_url: https://yaml.delight.test\n", encoding="utf-8")
    monkeypatch.setenv("DELIGHT_BASE_URL", "https://env.delight.test")
    assert load_settings().base_url == "https://env.delight.test"


def test_invalid_values_rejected():
    with pytest.raises(pydantic.ValidationError):
        load_settings(base_url="ftp://nope")
    with pytest.raises(pydantic.ValidationError):
        load_settings(max_poll_attempts=0)


def test_config_from_settings():
    s = load_settings(max_poll_attempts=60, poll_interval=2.0, message_id_prefix="Wi-Test-")
    cfg = DelightConfig.from_settings(s)
    assert cfg.base_url == "https://qa.delight.global"
    assert cfg.max_poll_attempts == 60
    assert cfg.poll_interval == 2.0
    assert isinstance(cfg.transport, HttpxTransport)
    assert cfg.id_factory().startswith("Wi-Test-")


def test_make_default_config():
    cfg = DelightConfig.make_default()
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.max_poll_attempts == 30
