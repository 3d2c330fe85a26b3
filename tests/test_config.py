"""
Tests for VaultPrep configuration and logging.
"""

import gc
import json
import logging
import warnings

from vaultprep.core.config import Config
from vaultprep.core.logger import Logger
from vaultprep.export.exporter import VaultExporter


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self):
        config = Config(config_file=None)

        assert config.unresolved_link_policy == "placeholder"
        assert config.implicit_satellite_fallback is False
        assert config.duplicate_hashkey_policy == "error"
        assert config.export_filename("standard_hub") == "standard_hub"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = Config(str(tmp_path / "missing.json"))
        assert config.get("logging.level") == "INFO"

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"link": {"unresolved_policy": "skip"}}), encoding="utf-8")

        config = Config(str(path))

        assert config.unresolved_link_policy == "skip"
        assert config.duplicate_hashkey_policy == "error"

    def test_invalid_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{", encoding="utf-8")

        assert Config(str(path)).unresolved_link_policy == "placeholder"

    def test_get_and_set(self):
        config = Config(config_file=None)

        config.set("satellite.implicit_fallback", True)
        config.set("custom.nested.value", 3)

        assert config.implicit_satellite_fallback is True
        assert config.get("custom.nested.value") == 3
        assert config.get("custom.missing", "fallback") == "fallback"

    def test_save(self, tmp_path):
        path = tmp_path / "config.json"
        config = Config(str(path))
        config.set("registry.duplicate_policy", "first_match")

        assert config.save() is True
        assert Config(str(path)).duplicate_hashkey_policy == "first_match"

    def test_defaults_are_not_shared(self):
        Config(config_file=None).set("link.unresolved_policy", "skip")
        assert Config(config_file=None).unresolved_link_policy == "placeholder"

    def test_environment_section_is_overlaid(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "link": {"unresolved_policy": "skip"},
            "environments": {"production": {"registry": {"duplicate_policy": "first_match"}}},
        }), encoding="utf-8")

        monkeypatch.setenv("VAULTPREP_ENV", "production")
        production = Config(str(path))
        monkeypatch.setenv("VAULTPREP_ENV", "development")
        development = Config(str(path))

        assert production.environment == "production"
        assert production.duplicate_hashkey_policy == "first_match"
        assert production.unresolved_link_policy == "skip"
        assert development.duplicate_hashkey_policy == "error"


class TestLogger:
    """Test cases for Logger."""

    def test_name_is_namespaced(self):
        assert Logger("hub_compiler", config=Config(config_file=None)).name == "vaultprep.hub_compiler"

    def test_log_omission(self, caplog):
        logger = Logger("test_logger", config=Config(config_file=None))

        with caplog.at_level(logging.WARNING, logger="vaultprep.test_logger"):
            logger.log_omission("standard_hub", "lookup", "", "no business keys")

        record = caplog.records[-1]
        assert record.getMessage() == "Omitted from standard_hub: lookup (no business keys)"
        assert record.reason == "no business keys"

    def test_file_handler(self, tmp_path):
        config = Config(config_file=None)
        config.set("logging.file", str(tmp_path / "vaultprep.log"))

        logger = Logger("file_logger", config=config)
        logger.info("written to file")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "written to file" in (tmp_path / "vaultprep.log").read_text(encoding="utf-8")

    def test_repeated_setup_closes_file_handlers(self, tmp_path):
        config = Config(config_file=None)
        config.set("logging.file", str(tmp_path / "vaultprep.log"))
        gc.collect()

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            for _ in range(10):
                VaultExporter(config)
            gc.collect()

        assert not [w for w in caught if issubclass(w.category, ResourceWarning)]
        handlers = logging.getLogger("vaultprep.exporter").handlers
        assert len([h for h in handlers if isinstance(h, logging.FileHandler)]) == 1
