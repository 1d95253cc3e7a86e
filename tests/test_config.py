"""Tests for configuration management."""

import json
from pathlib import Path

import pytest

from sdr_fec.core.config import (
    CodeConfig,
    ConfigValidationError,
    FECConfig,
    LoggingConfig,
    get_preset,
    list_presets,
)
from sdr_fec.fec.bch import BCHCode, EncodingType
from sdr_fec.fec.errors import CodeConfigurationError


class TestCodeConfig:
    """Tests for CodeConfig."""

    def test_defaults(self):
        """Test default code is POCSAG BCH(31,21)."""
        config = CodeConfig()
        assert config.encoding == "prefix"
        assert config.generator == 0x769
        assert config.check_polynomial == 0x25
        assert (config.n, config.k, config.t) == (31, 21, 2)

    def test_to_bch_config(self):
        """Test conversion to the immutable codec configuration."""
        bch = CodeConfig(encoding="factor").to_bch_config()
        assert bch.encoding is EncodingType.NON_SYSTEMATIC
        assert bch.generator == 0x769

    def test_invalid_encoding(self):
        """Test unknown encodings are rejected."""
        with pytest.raises(ConfigValidationError):
            CodeConfig(encoding="interleaved")

    def test_invalid_lengths(self):
        """Test range checks."""
        with pytest.raises(ConfigValidationError):
            CodeConfig(n=128)
        with pytest.raises(ConfigValidationError):
            CodeConfig(k=40)
        with pytest.raises(ConfigValidationError):
            CodeConfig(t=-1)
        with pytest.raises(ConfigValidationError):
            CodeConfig(generator=0)
        with pytest.raises(ConfigValidationError):
            CodeConfig(check_polynomial=1)

    def test_inconsistent_generator(self):
        """Test generator/length mismatches surface when building the codec."""
        config = CodeConfig(generator=0x25)
        with pytest.raises(CodeConfigurationError):
            config.to_bch_config()

    def test_validation_error_is_value_error(self):
        """Test ConfigValidationError is a ValueError."""
        with pytest.raises(ValueError):
            CodeConfig(n=0)


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_normalized(self):
        """Test levels are upper-cased."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        """Test unknown levels are rejected."""
        with pytest.raises(ConfigValidationError):
            LoggingConfig(level="verbose")


class TestFECConfig:
    """Tests for FECConfig persistence."""

    def test_dict_round_trip(self):
        """Test to_dict/from_dict."""
        config = FECConfig(code=CodeConfig(encoding="factor", t=1))
        restored = FECConfig.from_dict(config.to_dict())
        assert restored.code == config.code
        assert restored.logging == config.logging

    def test_from_dict_partial(self):
        """Test missing sections fall back to defaults."""
        config = FECConfig.from_dict({"logging": {"level": "info"}})
        assert config.code == CodeConfig()
        assert config.logging.level == "INFO"

    def test_from_dict_prefixed_strings(self):
        """Test polynomials given as 0x/0b strings."""
        config = FECConfig.from_dict(
            {"code": {"generator": "0x769", "check_polynomial": "0b100101"}}
        )
        assert config.code.generator == 0x769
        assert config.code.check_polynomial == 0x25

    def test_save_load(self, tmp_path):
        """Test saving and loading a configuration file."""
        path = tmp_path / "config.json"
        config = FECConfig(code=get_preset("bch_15_7"))
        assert config.save(str(path))

        with open(path) as f:
            assert json.load(f)["code"]["n"] == 15

        loaded = FECConfig.load(str(path))
        assert loaded is not None
        assert loaded.code == config.code

    def test_load_missing(self, tmp_path):
        """Test loading a missing file returns None."""
        assert FECConfig.load(str(tmp_path / "missing.json")) is None

    def test_load_invalid_json(self, tmp_path):
        """Test malformed JSON returns None."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert FECConfig.load(str(path)) is None

    def test_load_invalid_values(self, tmp_path):
        """Test out-of-range values return None."""
        path = tmp_path / "bad_values.json"
        path.write_text(json.dumps({"code": {"n": 1000}}))
        assert FECConfig.load(str(path)) is None

    def test_load_unknown_key(self, tmp_path):
        """Test unexpected keys return None."""
        path = tmp_path / "unknown.json"
        path.write_text(json.dumps({"code": {"interleave": 4}}))
        assert FECConfig.load(str(path)) is None

    def test_save_to_missing_directory(self, tmp_path):
        """Test save failures return False."""
        assert not FECConfig().save(str(tmp_path / "missing" / "config.json"))

    def test_default_path(self, tmp_path, monkeypatch):
        """Test default path lives under the user's config directory."""
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        path = FECConfig.get_default_config_path()
        assert path == tmp_path / ".config" / "sdr_fec" / "config.json"
        assert path.parent.is_dir()

    def test_save_load_default(self, tmp_path, monkeypatch):
        """Test default path persistence."""
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert FECConfig.load_default() == FECConfig()

        FECConfig(code=CodeConfig(t=1)).save_default()
        assert FECConfig.load_default().code.t == 1

    def test_load_default_falls_back(self, tmp_path, monkeypatch):
        """Test a corrupt default file gives the default configuration."""
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        FECConfig.get_default_config_path().write_text("{not json")
        assert FECConfig.load_default() == FECConfig()


class TestPresets:
    """Tests for preset code definitions."""

    def test_list_presets(self):
        """Test all presets are listed."""
        presets = list_presets()
        assert "pocsag" in presets
        assert "bch_15_7" in presets
        assert len(presets) == 5

    def test_unknown_preset(self):
        """Test unknown names return None."""
        assert get_preset("golay") is None

    def test_preset_is_copy(self):
        """Test modifying a returned preset leaves the original intact."""
        preset = get_preset("pocsag")
        preset.t = 0
        assert get_preset("pocsag").t == 2

    @pytest.mark.parametrize("name", list_presets())
    def test_presets_build(self, name):
        """Test every preset yields a working codec."""
        code = BCHCode(get_preset(name).to_bch_config())
        message = (1 << code.k) - 1
        assert code.decode_message(code.encode_message(message)) == message
