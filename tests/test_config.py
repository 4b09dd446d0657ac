"""
Settings file tests.
"""
import os
from datetime import timedelta

from azres.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "azres.yaml"))
        assert config == Config()
        assert config.read_timeout == timedelta(minutes=5)
        assert config.snapshot is None
        assert config.output_format == "json"

    def test_values(self, tmp_path):
        f = tmp_path / "azres.yaml"
        f.write_text("read_timeout: 10\nsnapshot: snap.json\noutput_format: Markdown\n")
        config = load_config(str(f))
        assert config.read_timeout == timedelta(minutes=10)
        assert config.snapshot == os.path.join(str(tmp_path), "snap.json")
        assert config.output_format == "markdown"

    def test_absolute_snapshot_path_kept(self, tmp_path):
        f = tmp_path / "azres.yaml"
        f.write_text("snapshot: /data/snap.json\n")
        assert load_config(str(f)).snapshot == "/data/snap.json"

    def test_invalid_values_fall_back(self, tmp_path):
        f = tmp_path / "azres.yaml"
        f.write_text("read_timeout: soon\noutput_format: html\n")
        config = load_config(str(f))
        assert config.read_timeout == timedelta(minutes=5)
        assert config.output_format == "json"

    def test_broken_yaml_gives_defaults(self, tmp_path):
        f = tmp_path / "azres.yaml"
        f.write_text("read_timeout: [unclosed")
        assert load_config(str(f)) == Config()

    def test_non_mapping_gives_defaults(self, tmp_path):
        f = tmp_path / "azres.yaml"
        f.write_text("- a\n- b\n")
        assert load_config(str(f)) == Config()

    def test_default_path_is_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "azres.yaml").write_text("read_timeout: 1\n")
        assert load_config().read_timeout == timedelta(minutes=1)
