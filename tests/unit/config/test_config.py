"""Configuration resolution: precedence, validation and audit output."""

from pathlib import Path

import pytest

from offergrab.config import (
    ConfigFileError,
    FrozenConfig,
    OfferGrabSettings,
    load_config,
    resolve_config,
)
from offergrab.constants import DEFAULT_FUNCTIONS_BASE_URL, DEFAULT_PUBLISHABLE_KEY
from offergrab.exceptions import ConfigurationError


def write_pyproject(root: Path, body: str) -> Path:
    path = root / "pyproject.toml"
    path.write_text(body, encoding="utf-8")
    return path


@pytest.mark.unit
def test_defaults_when_no_sources(tmp_path):
    config = resolve_config(project_root=tmp_path)

    assert config.functions_base_url == DEFAULT_FUNCTIONS_BASE_URL
    assert config.publishable_key == DEFAULT_PUBLISHABLE_KEY
    assert config.geo_providers == "ipapi,ipwho,cloudflare"
    assert set(config.origin.values()) == {"default"}
    assert config.to_frozen() == FrozenConfig()


@pytest.mark.unit
def test_project_file_values(tmp_path):
    write_pyproject(
        tmp_path,
        '[tool.offergrab]\nrequest_timeout = 12\ngeo_providers = ["ipwho"]\n'
        'unrelated = "ignored"\n',
    )

    config = resolve_config(project_root=tmp_path)

    assert config.request_timeout == 12.0
    assert config.origin["request_timeout"] == "file"
    assert config.to_frozen().geo_providers == ("ipwho",)
    assert "unrelated" not in config.origin


@pytest.mark.unit
def test_project_file_is_found_in_parent_directory(tmp_path):
    write_pyproject(tmp_path, "[tool.offergrab]\ngeo_timeout = 1.5\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert resolve_config(project_root=nested).geo_timeout == 1.5


@pytest.mark.unit
def test_precedence_programmatic_over_env_over_file(tmp_path, monkeypatch):
    write_pyproject(
        tmp_path, "[tool.offergrab]\nrequest_timeout = 12\ngeo_timeout = 2\n"
    )
    monkeypatch.setenv("OFFERGRAB_REQUEST_TIMEOUT", "20")
    monkeypatch.setenv("OFFERGRAB_GEO_TIMEOUT", "4")

    config = resolve_config({"request_timeout": 5}, project_root=tmp_path)

    assert config.request_timeout == 5.0
    assert config.geo_timeout == 4.0
    assert config.origin["request_timeout"] == "programmatic"
    assert config.origin["geo_timeout"] == "env"


@pytest.mark.unit
def test_env_file_does_not_override_environment(tmp_path, monkeypatch):
    # Register the variable so values loaded from the file are undone.
    monkeypatch.setenv("OFFERGRAB_INTERACTION_KEY", "placeholder")
    monkeypatch.delenv("OFFERGRAB_INTERACTION_KEY")
    monkeypatch.setenv("OFFERGRAB_GEO_TIMEOUT", "4")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local overrides\nOFFERGRAB_GEO_TIMEOUT=9\n"
        'OFFERGRAB_INTERACTION_KEY="lp_clicked"\n',
        encoding="utf-8",
    )

    config = resolve_config(use_env_file=env_file, project_root=tmp_path)

    assert config.geo_timeout == 4.0
    assert config.interaction_key == "lp_clicked"


@pytest.mark.unit
def test_missing_env_file_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="Environment file not found"):
        resolve_config(use_env_file=tmp_path / "absent.env", project_root=tmp_path)


@pytest.mark.unit
def test_base_url_is_normalized(tmp_path):
    config = resolve_config(
        {"functions_base_url": " https://fn.example.test/v1/ "}, project_root=tmp_path
    )

    assert config.functions_base_url == "https://fn.example.test/v1"


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"functions_base_url": "ftp://fn.example.test"},
        {"request_timeout": 0},
        {"geo_providers": "ipapi,maxmind"},
        {"interaction_key": ""},
    ],
)
def test_invalid_values_raise_configuration_error(tmp_path, overrides):
    with pytest.raises(ConfigurationError):
        resolve_config(overrides, project_root=tmp_path)


@pytest.mark.unit
def test_invalid_environment_value_names_the_variable(tmp_path, monkeypatch):
    monkeypatch.setenv("OFFERGRAB_GEO_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="OFFERGRAB_GEO_TIMEOUT"):
        resolve_config(project_root=tmp_path)


@pytest.mark.unit
def test_configuration_error_is_a_value_error(tmp_path):
    with pytest.raises(ValueError):
        resolve_config({"request_timeout": -1}, project_root=tmp_path)


@pytest.mark.unit
@pytest.mark.parametrize(
    "body",
    ["[tool.offergrab\n", "[tool]\noffergrab = 3\n"],
)
def test_malformed_project_file(tmp_path, body):
    write_pyproject(tmp_path, body)

    with pytest.raises(ConfigFileError) as exc_info:
        resolve_config(project_root=tmp_path)

    assert exc_info.value.file_path == (tmp_path / "pyproject.toml").resolve()
    assert isinstance(exc_info.value, ConfigurationError)


@pytest.mark.unit
def test_audit_and_repr_redact_the_key(tmp_path, monkeypatch):
    monkeypatch.setenv("OFFERGRAB_GEO_TIMEOUT", "4")
    config = resolve_config(project_root=tmp_path)

    audit = config.audit()

    assert "geo_timeout: env:OFFERGRAB_GEO_TIMEOUT=4.0" in audit
    assert "publishable_key: default:<redacted>" in audit
    assert DEFAULT_PUBLISHABLE_KEY not in audit
    assert DEFAULT_PUBLISHABLE_KEY not in repr(config)
    assert DEFAULT_PUBLISHABLE_KEY not in repr(config.to_frozen())


@pytest.mark.unit
def test_with_overrides_marks_programmatic(tmp_path):
    config = resolve_config(project_root=tmp_path).with_overrides(
        publishable_key=None, nonsense=1
    )

    assert config.publishable_key is None
    assert config.origin["publishable_key"] == "programmatic"
    assert "nonsense" not in config.origin
    assert "publishable_key: programmatic:None" in config.audit()


@pytest.mark.unit
def test_settings_schema_accepts_sequences():
    settings = OfferGrabSettings(geo_providers=["Cloudflare", " ipapi "])

    assert settings.geo_providers == "cloudflare,ipapi"


@pytest.mark.unit
def test_load_config_freezes_resolved_values(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OFFERGRAB_GEO_PROVIDERS", "cloudflare")

    config = load_config({"request_timeout": 7})

    assert isinstance(config, FrozenConfig)
    assert config.request_timeout == 7.0
    assert config.geo_providers == ("cloudflare",)
    assert config.functions_base_url == DEFAULT_FUNCTIONS_BASE_URL


@pytest.mark.unit
@pytest.mark.parametrize(
    "providers",
    [("bogus",), ("ipapi", "maxmind"), ["ipapi"], "ipapi,ipwho"],
)
def test_frozen_config_rejects_unknown_geo_providers(providers):
    with pytest.raises(ConfigurationError, match="geo_providers"):
        FrozenConfig(geo_providers=providers)


@pytest.mark.unit
def test_frozen_config_accepts_known_provider_subsets():
    assert FrozenConfig(geo_providers=()).geo_providers == ()
    assert FrozenConfig(geo_providers=("ipwho", "ipapi")).geo_providers == (
        "ipwho",
        "ipapi",
    )
