from __future__ import annotations

import pytest

from pipellm.core.config_loader import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    ConfigLoader,
    default_config_path,
)
from pipellm.core.errors import ConfigNotFoundError, ConfigParseError


def test_load_config(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config()

    config = ConfigLoader().load()

    assert config.api_key == "test_api_key_12345"  # pragma: allowlist secret
    assert config.model == "gpt-4o-mini"
    assert len(config.prompts) == 3
    assert config.prompts[0].name == "test1"
    assert config.prompts[0].prompt == "This is test prompt 1"
    # folded scalar
    assert config.prompts[1].prompt.strip() == "This is a multi-line test prompt 2"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 30.0


def test_model_defaults_when_absent(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config("api_key: k\nprompts:\n- name: a\n  prompt: b\n")

    config = ConfigLoader().load()

    assert config.model == DEFAULT_MODEL


def test_optional_endpoint_settings(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config("api_key: k\nbase_url: http://localhost:8080/v1/\ntimeout: 5\n")

    config = ConfigLoader().load()

    assert config.base_url == "http://localhost:8080/v1/"
    assert config.timeout == 5.0
    assert config.prompts == []


def test_empty_file_is_empty_config(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config("")

    config = ConfigLoader().load()

    assert config.api_key == ""
    assert config.prompts == []


def test_scalar_values_are_coerced_to_text(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config("api_key: 12345\nprompts:\n- name: 42\n  prompt: yes\n- name: bare\n")

    config = ConfigLoader().load()

    assert config.api_key == "12345"
    assert config.prompts[0].name == "42"
    assert config.prompts[0].prompt == "True"
    assert config.prompts[1].prompt == ""


def test_missing_file_reports_path(home) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ConfigNotFoundError) as exc_info:
        ConfigLoader().load()

    expected = home / ".pipellm.yaml"
    assert exc_info.value.path == expected
    assert "config file not found" in str(exc_info.value)
    assert str(expected) in str(exc_info.value)


def test_invalid_yaml(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config(
        "api_key: test_key\n"
        "prompts:\n"
        "  - name: test\n"
        "    prompt: valid\n"
        "  invalid_yaml_structure: [unclosed array\n"
    )

    with pytest.raises(ConfigParseError) as exc_info:
        ConfigLoader().load()

    assert "failed to parse config" in str(exc_info.value)


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "api_key: k\nprompts: summarize\n",
        "api_key: k\nprompts:\n- plain string\n",
        "api_key: k\ntimeout: soon\n",
    ],
)
def test_wrong_shape_is_parse_error(write_config, content) -> None:  # type: ignore[no-untyped-def]
    write_config(content)

    with pytest.raises(ConfigParseError):
        ConfigLoader().load()


def test_config_env_override(tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    path = tmp_path / "custom.yaml"
    path.write_text("api_key: from_env\n", encoding="utf-8")
    monkeypatch.setenv("PIPELLM_CONFIG", str(path))

    assert default_config_path() == path
    assert ConfigLoader().load().api_key == "from_env"


def test_non_utf8_config_is_parse_error(home) -> None:  # type: ignore[no-untyped-def]
    (home / ".pipellm.yaml").write_bytes(b"api_key: k\nprompts:\n- name: cafe\n  prompt: caf\xe9\n")

    with pytest.raises(ConfigParseError) as exc_info:
        ConfigLoader().load()

    assert "failed to parse config" in str(exc_info.value)


def test_masked_hides_api_key(write_config) -> None:  # type: ignore[no-untyped-def]
    write_config()

    masked = ConfigLoader().load().masked()

    assert masked["api_key"] == "test..."
    assert masked["prompts"] == ["test1", "test2", "CaseSensitive"]
