import pytest
from pathlib import Path

from kuler.constants import BASE_URL
from kuler.errors import ConfigurationError
from kuler.settings import KulerSettings

CONFIG_YAML = """\
api_key: "${KULER_TEST_KEY}"
timeout: 5
items_per_page: 50
"""


def test_settings_defaults() -> None:
    cfg = KulerSettings(api_key="abc")
    assert cfg.base_url == BASE_URL
    assert cfg.items_per_page == 20
    assert cfg.timeout == 10.0


@pytest.mark.parametrize(
    "overrides",
    [{"api_key": "   "}, {"timeout": 0}, {"items_per_page": 0}, {"items_per_page": 101}],
)
def test_settings_validation(overrides: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        KulerSettings(**{"api_key": "abc", **overrides})


def test_load_interpolates_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KULER_TEST_KEY", "from-env")
    path = tmp_path / "kuler.yaml"
    path.write_text(CONFIG_YAML)

    cfg = KulerSettings.load(path)

    assert cfg.api_key == "from-env"
    assert cfg.timeout == 5
    assert cfg.items_per_page == 50


def test_load_uses_kuler_config_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text('api_key: "abc"\n')
    monkeypatch.setenv("KULER_CONFIG", str(path))
    assert KulerSettings.load().api_key == "abc"


def test_load_missing_key_is_configuration_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("KULER_TEST_KEY", raising=False)
    path = tmp_path / "kuler.yaml"
    path.write_text(CONFIG_YAML)
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        KulerSettings.load(path)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        KulerSettings.load(tmp_path / "nope.yaml")


def test_load_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "kuler.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationError, match="mapping"):
        KulerSettings.load(path)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KULER_API_KEY", "env-key")
    monkeypatch.setenv("KULER_ITEMS_PER_PAGE", "5")
    monkeypatch.delenv("KULER_BASE_URL", raising=False)
    cfg = KulerSettings.from_env()
    assert cfg.api_key == "env-key"
    assert cfg.items_per_page == 5


def test_from_env_requires_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("KULER_API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="API key"):
        KulerSettings.from_env()
