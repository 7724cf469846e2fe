"""
Tests for TrawlerConfig.from_env.
"""

import logging

import pytest

from trawler.config import TrawlerConfig
from trawler.errors import ConfigError


class TestFromEnv:
    def test_defaults(self):
        config = TrawlerConfig.from_env({})
        assert config == TrawlerConfig()
        assert config.encoding == "utf-8"
        assert config.excluded_directories == ("node_modules", "out")
        assert config.exclude_patterns == ()
        assert config.log_level == logging.INFO

    def test_all_variables(self):
        config = TrawlerConfig.from_env(
            {
                "TRAWLER_ENCODING": "Latin-1",
                "TRAWLER_EXCLUDED_DIRS": "dist, target ,",
                "TRAWLER_EXCLUDE": "*.gen.lang,generated/",
                "TRAWLER_LOG_LEVEL": "debug",
            }
        )
        assert config.encoding == "iso8859-1"
        assert config.excluded_directories == ("dist", "target")
        assert config.exclude_patterns == ("*.gen.lang", "generated/")
        assert config.log_level == logging.DEBUG

    def test_empty_excluded_dirs_disables_defaults(self):
        assert TrawlerConfig.from_env({"TRAWLER_EXCLUDED_DIRS": ""}).excluded_directories == ()

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("TRAWLER_EXCLUDE", "*.tmp")
        assert TrawlerConfig.from_env().exclude_patterns == ("*.tmp",)

    def test_unknown_encoding(self):
        with pytest.raises(ConfigError):
            TrawlerConfig.from_env({"TRAWLER_ENCODING": "no-such-codec"})

    @pytest.mark.parametrize("value", ["LOUD", "BASIC_FORMAT"])
    def test_invalid_log_level(self, value):
        with pytest.raises(ConfigError):
            TrawlerConfig.from_env({"TRAWLER_LOG_LEVEL": value})
