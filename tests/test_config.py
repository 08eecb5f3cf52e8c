"""Tests for the yaml configuration holder."""

import yaml

from arns.config.config import LAST_CONFIG_VERSION, Config


class TestConfig:
    def test_creates_default_config(self, confdir):
        config = Config(confdir)
        assert confdir.is_dir()
        assert config.config_path.exists()
        assert config["version"] == LAST_CONFIG_VERSION
        assert config["null_placeholder"] == "null"
        assert config["log_retention"] == {"max_lines": -1, "max_age": 2419200}

    def test_reloads_written_config(self, confdir):
        config = Config(confdir)
        config["null_placeholder"] = "-"
        config.write_config()

        reloaded = Config(confdir)
        assert reloaded["null_placeholder"] == "-"
        assert "null_placeholder" in reloaded
        assert "missing" not in reloaded

    def test_updates_outdated_config(self, confdir):
        confdir.mkdir(parents=True)
        (confdir / "config.yaml").write_text(yaml.dump({"version": 0}), encoding="utf-8")

        config = Config(confdir)
        config.initialize()

        assert config["version"] == LAST_CONFIG_VERSION
        assert config["log_retention"]["max_lines"] == -1
        assert config["null_placeholder"] == "null"
        on_disk = yaml.safe_load((confdir / "config.yaml").read_text(encoding="utf-8"))
        assert on_disk["version"] == LAST_CONFIG_VERSION

    def test_partial_update_keeps_existing_values(self, confdir):
        confdir.mkdir(parents=True)
        (confdir / "config.yaml").write_text(
            yaml.dump({"version": 1, "log_retention": {"max_lines": 10, "max_age": 0}}),
            encoding="utf-8",
        )

        config = Config(confdir)
        config.initialize()

        assert config["log_retention"] == {"max_lines": 10, "max_age": 0}
        assert config["null_placeholder"] == "null"

    def test_unversioned_config_is_fully_updated(self, confdir):
        confdir.mkdir(parents=True)
        (confdir / "config.yaml").write_text("", encoding="utf-8")

        config = Config(confdir)
        config.initialize()

        assert config["version"] == LAST_CONFIG_VERSION
        assert "log_retention" in config
