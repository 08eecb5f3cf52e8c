"""
Module for the configuration parser object.
"""
import sys
from pathlib import Path

import yaml

from ..resource import NULL_PLACEHOLDER

LAST_CONFIG_VERSION = 2


class Config:
    """
    Configuration parser and holder.

    Attributes
    ----------
    version_updaters : dict
        A numbered dict of update functions for incrementally upgrading an outdated configuration file.
    path : pathlib.Path
        The configuration parent path, where all configuration data is stored.
    config_path : pathlib.Path
        The path to the configuration yaml file.
    config : dict
        The loaded configuration.
    """

    def __init__(self, path=None):
        """
        Initializes a Config object.

        Parameters
        ----------
        path : str
            The configuration parent path, if not default. Defaults to ~/.config/arns.
        """
        print("Initializing arns configuration...", file=sys.stderr)
        self.version_updaters = {
            1: self._update_1,
            2: self._update_2,
        }
        if path is None:
            path = Path.home() / ".config" / "arns"
        else:
            path = Path(path)
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)
        self.path = path

        self.config_path = self.path / "config.yaml"

        if not self.config_path.exists():
            self.create_default_config()
        else:
            self.parse_config()

    def initialize(self):
        """
        Late initializer for the Config object. Should be called after everything has been instantiated
        but before anything is being used.
        """
        self.update_version()

    def _update_1(self):
        """
        Version 1 configuration update.

        Do not call.
        """
        self.config["log_retention"] = {
            "max_lines": -1,
            "max_age": 2419200,
        }

    def _update_2(self):
        """
        Version 2 configuration update.

        Do not call.
        """
        self.config["null_placeholder"] = NULL_PLACEHOLDER

    def update_version(self):
        """
        Main configuration update sequence. Always called by initialize(), not required to call separately.
        """
        if "version" not in self.config:
            version = 0
        else:
            version = self.config["version"]
        while version < LAST_CONFIG_VERSION:
            print(f"Performing config update to version {version + 1}", file=sys.stderr)
            self.version_updaters[version + 1]()
            version += 1
        self.config["version"] = version
        self.write_config()

    def create_default_config(self):
        """
        Generates first time default configuration. Should match the expected format of the latest update version.

        Writes the generated configuration to the configuration file in config_path.
        """
        print("Creating first time configuration...", file=sys.stderr)
        self.config = {
            "version": LAST_CONFIG_VERSION,
            "log_retention": {
                "max_lines": -1,
                "max_age": 2419200,
            },
            "null_placeholder": NULL_PLACEHOLDER,
        }

        self.write_config()

    def write_config(self):
        """
        Immediately writes the configuration to the configuration file in config_path.
        """
        with self.config_path.open("w", encoding="utf-8") as file:
            file.write(yaml.dump(self.config))

    def __contains__(self, item):
        return item in self.config

    def __getitem__(self, item):
        """
        Retrieve a configuration value.

        Parameters
        ----------
        item : str
            The configuration key.

        Returns
        -------
        object
            The configuration value.
        """
        return self.config[item]

    def __setitem__(self, item, value):
        """
        Set a configuration value.

        Parameters
        ----------
        item : str
            The configuration key.
        value : object
            The configuration value.
        """
        self.config[item] = value

    def parse_config(self):
        """
        Parses the configuration file specified in config_path and replaces the currently loaded config with its contents.
        """
        with self.config_path.open("r", encoding="utf-8") as file:
            self.config = yaml.safe_load(file.read())
        if self.config is None:
            self.config = {}
