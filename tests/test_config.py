import dataclasses

import pytest

from envsource.config import (
    DEFAULT_COMMENT,
    DEFAULT_CONFIG,
    DEFAULT_EXPORT,
    DEFAULT_QUOTE,
    SourcerConfig,
)
from envsource.quoting import unquote


def test_defaults():
    config = SourcerConfig()
    assert config.comment == DEFAULT_COMMENT == "#"
    assert config.quote == DEFAULT_QUOTE == '"'
    assert config.export == DEFAULT_EXPORT == "export"
    assert config.unquote is unquote
    assert config == DEFAULT_CONFIG


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.comment = ";"


def test_replace_returns_copy():
    config = DEFAULT_CONFIG.replace(comment="", export="set")
    assert config.comment == ""
    assert config.export == "set"
    assert config.quote == DEFAULT_QUOTE
    assert DEFAULT_CONFIG.comment == DEFAULT_COMMENT


@pytest.mark.parametrize("field_name", ["comment", "quote", "export"])
def test_tokens_must_be_strings(field_name):
    with pytest.raises(TypeError):
        SourcerConfig(**{field_name: None})


def test_unquote_must_be_callable():
    with pytest.raises(TypeError):
        SourcerConfig(unquote="not callable")


class TestFromEnv:
    def test_unset_keeps_defaults(self):
        assert SourcerConfig.from_env({}) == DEFAULT_CONFIG

    def test_empty_disables(self):
        config = SourcerConfig.from_env({"ENVSOURCE_COMMENT": "", "ENVSOURCE_EXPORT": ""})
        assert config.comment == ""
        assert config.export == ""
        assert config.quote == DEFAULT_QUOTE

    def test_overrides(self):
        config = SourcerConfig.from_env({"ENVSOURCE_QUOTE": "'", "OTHER": "x"})
        assert config.quote == "'"

    def test_custom_prefix(self):
        config = SourcerConfig.from_env({"APP_COMMENT": ";"}, prefix="APP_")
        assert config.comment == ";"

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("ENVSOURCE_EXPORT", "set")
        assert SourcerConfig.from_env().export == "set"
