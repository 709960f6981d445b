"""Tests for the configuration loader."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from staticsite.config.loader import ConfigLoader, ConfigValidationError
from staticsite.config.state_machine import ConfigState


VALID_CONFIG = """
static_site:
  destination: public
  base_url: https://example.com
  exclude:
    - /drafts
  symlinks:
    assets/img: img
  copy:
    assets/fonts: fonts
  glide:
    directory: processed
site:
  content: content
  templates: templates
  routes:
    /search: search
    /blog/{slug}: post
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a valid configuration file."""
    path = tmp_path / "static_site.yaml"
    path.write_text(VALID_CONFIG, encoding="utf-8")
    return path


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_initial_state_is_unloaded(self) -> None:
        """Loader starts UNLOADED."""
        loader = ConfigLoader(run_id="test-run")
        assert loader.state == ConfigState.UNLOADED

    def test_load_valid_config(self, config_file: Path) -> None:
        """A valid file loads and the loader becomes READY."""
        loader = ConfigLoader(run_id="test-run")

        config = loader.load(config_file)

        assert loader.state == ConfigState.READY
        assert config.static_site.base_url == "https://example.com"
        assert config.static_site.exclude == ["/drafts"]
        assert config.static_site.glide.directory == "processed"
        assert list(config.site.routes) == ["/search", "/blog/{slug}"]

    def test_relative_paths_resolve_against_file(self, config_file: Path) -> None:
        """Relative paths are anchored at the config file's directory."""
        base = config_file.resolve().parent

        config = ConfigLoader(run_id="test-run").load(config_file)

        assert config.static_site.destination == base / "public"
        assert config.static_site.symlinks == {str(base / "assets/img"): "img"}
        assert config.static_site.copy_paths == {str(base / "assets/fonts"): "fonts"}
        assert config.site.content == base / "content"
        assert config.site.templates == base / "templates"

    def test_file_checksum_is_recorded(self, config_file: Path) -> None:
        """The SHA-256 of the file is available after loading."""
        loader = ConfigLoader(run_id="test-run")

        loader.load(config_file)

        assert loader.file_checksum is not None
        assert len(loader.file_checksum) == 64

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file fails with a file_not_found error."""
        loader = ConfigLoader(run_id="test-run")

        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.yaml")

        assert loader.state == ConfigState.FAILED
        assert loader.validation_errors[0]["type"] == "file_not_found"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML fails with a yaml_parse_error."""
        path = tmp_path / "bad.yaml"
        path.write_text("static_site: [unclosed", encoding="utf-8")
        loader = ConfigLoader(run_id="test-run")

        with pytest.raises(yaml.YAMLError):
            loader.load(path)

        assert loader.state == ConfigState.FAILED
        assert loader.validation_errors[0]["type"] == "yaml_parse_error"

    def test_schema_errors_are_recorded(self, tmp_path: Path) -> None:
        """Schema violations are recorded with their location."""
        path = tmp_path / "invalid.yaml"
        path.write_text("static_site:\n  base_url: /\n", encoding="utf-8")
        loader = ConfigLoader(run_id="test-run")

        with pytest.raises(ValidationError):
            loader.load(path)

        assert loader.state == ConfigState.FAILED
        errors = loader.validation_errors
        assert errors[0]["loc"] == "static_site.destination"
        assert errors[0]["type"] == "missing"

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        """A YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")
        loader = ConfigLoader(run_id="test-run")

        with pytest.raises(ConfigValidationError):
            loader.load(path)

        assert loader.state == ConfigState.FAILED
        assert loader.validation_errors[0]["type"] == "model_type"

    def test_empty_file_misses_static_site(self, tmp_path: Path) -> None:
        """An empty file lacks the required static_site section."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        loader = ConfigLoader(run_id="test-run")

        with pytest.raises(ValidationError):
            loader.load(path)

        assert loader.validation_errors[0]["loc"] == "static_site"
