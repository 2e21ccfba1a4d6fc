"""
Tests for YAML build configuration and feature flags.
"""

import pytest

from polystrand.config import (
    BuildConfig, ExportConfig, FeatureFlags, HelixConfig, LoggingConfig,
    apply_logging_config, config_from_dict, load_config,
)
from polystrand.core.helix import DNA_B_FORM, RNA_A_FORM
from polystrand.utils.logger.logger import Logger


class TestHelixConfig:
    """Tests for helix overrides."""

    def test_defaults(self):
        cfg = HelixConfig()
        assert cfg.parameters_for("dna") == DNA_B_FORM
        assert cfg.parameters_for("RNA") == RNA_A_FORM

    def test_override(self):
        cfg = HelixConfig(rna={"twist_deg": 33.0})
        params = cfg.parameters_for("RNA")
        assert params.twist_deg == 33.0
        assert params.rise == RNA_A_FORM.rise

    def test_unknown_field_rejected(self):
        is_valid, err = HelixConfig(dna={"pitch": 3.4}).validate()
        assert not is_valid
        assert "pitch" in err

    def test_invalid_value_rejected(self):
        is_valid, err = HelixConfig(dna={"rise": -1.0}).validate()
        assert not is_valid
        assert "rise" in err

    def test_unknown_family(self):
        with pytest.raises(ValueError):
            HelixConfig().parameters_for("PNA")


class TestExportAndLoggingConfig:
    """Tests for export and logging sections."""

    def test_valid_export(self):
        is_valid, err = ExportConfig().validate()
        assert is_valid
        assert err is None

    def test_negative_box_scale_rejected(self):
        is_valid, err = ExportConfig(box_scale=-1.0).validate()
        assert not is_valid
        assert "box_scale" in err

    def test_unknown_strategy_rejected(self):
        is_valid, err = ExportConfig(strategies=["stl"]).validate()
        assert not is_valid
        assert "stl" in err

    def test_unknown_log_level_rejected(self):
        is_valid, err = LoggingConfig(level="LOUD").validate()
        assert not is_valid


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "build.yaml"
        path.write_text(
            "helix:\n"
            "  rna:\n"
            "    twist_deg: 33.0\n"
            "export:\n"
            "  box_scale: 3.0\n"
            "  strategies: [oxdna_topology, json_view]\n"
            "logging:\n"
            "  level: INFO\n"
        )
        config = load_config(path)
        assert config.helix.parameters_for("RNA").twist_deg == 33.0
        assert config.export.box_scale == 3.0
        assert config.export.strategies == ["oxdna_topology", "json_view"]
        assert config.logging.level == "INFO"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.export.box_scale == 5.0

    def test_invalid_config_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("export:\n  box_scale: 0\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_config_from_dict_none(self):
        assert isinstance(config_from_dict(None), BuildConfig)


class TestApplyLoggingConfig:
    """Tests for logger setup from configuration."""

    def test_writes_to_configured_path(self, tmp_path):
        path = tmp_path / "logs" / "run.log"
        apply_logging_config(LoggingConfig(enabled=True, path=str(path), level="INFO"))
        Logger.log("debug detail")
        Logger.log("visible", Logger.LogPriority.WARNING)
        content = path.read_text()
        assert "visible" in content
        assert "debug detail" not in content

    def test_disabled(self, tmp_path):
        apply_logging_config(LoggingConfig(enabled=False))
        assert Logger.is_logging_enabled is False


class TestFeatureFlags:
    """Tests for runtime feature flags."""

    def test_defaults(self):
        assert FeatureFlags.STRICT_FRAME_CHECKS is True
        assert FeatureFlags.LOG_HELIX_ALIGNMENT is False
        assert FeatureFlags.validate()

    def test_legacy_mode(self):
        FeatureFlags.legacy_mode()
        assert FeatureFlags.STRICT_FRAME_CHECKS is False

    def test_reset(self):
        FeatureFlags.legacy_mode()
        FeatureFlags.enable_helix_alignment_logging()
        FeatureFlags.reset()
        assert FeatureFlags.STRICT_FRAME_CHECKS is True
        assert FeatureFlags.LOG_HELIX_ALIGNMENT is False

    def test_invalid_tolerance(self):
        FeatureFlags.DEGENERACY_TOLERANCE = 0.5
        with pytest.raises(ValueError):
            FeatureFlags.validate()
