"""Unit tests for configuration system."""

import logging
from pathlib import Path

import pytest

from devsecops_kit.config import (
    KitConfig,
    ToolsConfig,
    find_config_file,
    load_config,
    load_config_from_dict,
    normalize_severity,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    """Tests for environment variable substitution."""

    def test_substitute_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test substituting env var in string."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert substitute_env_vars("prefix_${TEST_VAR}_suffix") == "prefix_test_value_suffix"

    def test_substitute_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test substituting env vars in nested dicts and lists."""
        monkeypatch.setenv("SEVERITY", "critical")

        data = {"severity_threshold": "${SEVERITY}", "extra": ["static", "${SEVERITY}"]}
        result = substitute_env_vars(data)

        assert result == {"severity_threshold": "critical", "extra": ["static", "critical"]}

    def test_missing_env_var_raises(self) -> None:
        """Test that missing env var raises ValueError."""
        with pytest.raises(ValueError, match="Environment variable not set"):
            substitute_env_vars("${DEVSECOPS_KIT_NONEXISTENT_VAR}")

    def test_passthrough_non_string(self) -> None:
        """Test that non-string values pass through unchanged."""
        assert substitute_env_vars(123) == 123
        assert substitute_env_vars(True) is True
        assert substitute_env_vars(None) is None


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_find_dot_dir_config(self, tmp_path: Path) -> None:
        """Test finding .devsecops/config.yaml."""
        config_dir = tmp_path / ".devsecops"
        config_dir.mkdir()
        config_file = config_dir / "config.yaml"
        config_file.write_text("severity_threshold: low\n")

        assert find_config_file(tmp_path) == config_file

    def test_find_root_config(self, tmp_path: Path) -> None:
        """Test finding devsecops.yaml at root."""
        config_file = tmp_path / "devsecops.yaml"
        config_file.write_text("severity_threshold: low\n")

        assert find_config_file(tmp_path) == config_file

    def test_prefer_dot_dir_over_root(self, tmp_path: Path) -> None:
        """Test .devsecops/config.yaml is preferred over devsecops.yaml."""
        config_dir = tmp_path / ".devsecops"
        config_dir.mkdir()
        preferred = config_dir / "config.yaml"
        preferred.write_text("# preferred")
        (tmp_path / "devsecops.yaml").write_text("# fallback")

        assert find_config_file(tmp_path) == preferred

    def test_no_config_returns_none(self, tmp_path: Path) -> None:
        """Test returns None when no config found."""
        assert find_config_file(tmp_path) is None


class TestLoadConfigFromDict:
    """Tests for loading config from dictionary."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = load_config_from_dict({})

        assert config.severity_threshold == "high"
        assert config.tools == ToolsConfig(semgrep=True, gitleaks=True, trivy=True)
        assert config.ci.json_output is False
        assert config.ci.timeout == 10

    def test_custom_values(self) -> None:
        """Test overriding every section."""
        config = load_config_from_dict(
            {
                "severity_threshold": "Medium",
                "tools": {"trivy": False},
                "ci": {"json_output": True, "timeout": 30},
            }
        )

        assert config.severity_threshold == "medium"
        assert config.tools.enabled() == ["semgrep", "gitleaks"]
        assert config.ci.json_output is True
        assert config.ci.timeout == 30

    def test_empty_sections(self) -> None:
        """Test that empty YAML sections fall back to defaults."""
        config = load_config_from_dict({"tools": None, "ci": None})

        assert config.tools.enabled() == ["semgrep", "gitleaks", "trivy"]

    def test_invalid_severity(self) -> None:
        """Test that an unknown severity in the config file is an error."""
        with pytest.raises(ValueError, match="Invalid severity threshold"):
            load_config_from_dict({"severity_threshold": "urgent"})

    def test_invalid_tool_flag(self) -> None:
        """Test that tool flags must be booleans."""
        with pytest.raises(ValueError, match="tools.semgrep"):
            load_config_from_dict({"tools": {"semgrep": "maybe"}})

    @pytest.mark.parametrize("section", ["tools", "ci"])
    def test_section_must_be_mapping(self, section: str) -> None:
        """Test that a list where a mapping belongs is an error."""
        with pytest.raises(ValueError, match=f"'{section}' must be a mapping"):
            load_config_from_dict({section: ["semgrep"]})

    @pytest.mark.parametrize("timeout", [[1], "soon", True])
    def test_invalid_timeout(self, timeout: object) -> None:
        """Test that ci.timeout must be an integer."""
        with pytest.raises(ValueError, match="ci.timeout"):
            load_config_from_dict({"ci": {"timeout": timeout}})

    def test_timeout_from_string(self) -> None:
        """Test that a numeric string (e.g. from ${VAR}) is accepted."""
        config = load_config_from_dict({"ci": {"timeout": "45"}})

        assert config.ci.timeout == 45


class TestLoadConfig:
    """Tests for loading config files."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Test loading an explicit config file."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("severity_threshold: critical\ntools:\n  gitleaks: false\n")

        config = load_config(config_path=config_file)

        assert config.severity_threshold == "critical"
        assert config.tools.gitleaks is False
        assert config.config_path == config_file

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        """Test that a missing explicit file raises."""
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "missing.yaml")

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        """Test that a YAML list is rejected."""
        config_file = tmp_path / "devsecops.yaml"
        config_file.write_text("- high\n")

        with pytest.raises(ValueError, match="YAML mapping"):
            load_config(config_path=config_file)

    def test_auto_discover(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test discovery from the working directory."""
        (tmp_path / "devsecops.yaml").write_text("severity_threshold: low\n")
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.severity_threshold == "low"

    def test_no_file_returns_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults when nothing is found."""
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.config_path is None
        assert config.severity_threshold == "high"

    def test_yaml_syntax_error(self, tmp_path: Path) -> None:
        """Test that unparseable YAML is reported as a ValueError."""
        config_file = tmp_path / "devsecops.yaml"
        config_file.write_text("tools: [semgrep\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(config_path=config_file)


class TestNormalizeSeverity:
    """Tests for CLI severity normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("low", "low"), ("MEDIUM", "medium"), (" critical ", "critical"), (None, "high"), ("", "high")],
    )
    def test_valid_values(self, value: str | None, expected: str) -> None:
        """Test accepted values are lower-cased."""
        assert normalize_severity(value) == expected

    def test_unknown_value_defaults_with_warning(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that an unknown severity falls back to high."""
        monkeypatch.setattr(logging.getLogger("devsecops_kit"), "propagate", True)

        with caplog.at_level(logging.WARNING, logger="devsecops_kit"):
            assert normalize_severity("urgent") == "high"

        assert "Unknown severity 'urgent'" in caplog.text
