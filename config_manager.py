"""Configuration management for the puzzle-generation analysis suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize generation settings and the uniqueness oracle's iteration cap.

File format (high-level)
------------------------
- generation_settings: board sizes, runs per size, oracles, seed and output
  directory.
- oracle_settings: ``max_completion_iterations`` for the uniqueness oracle.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load and query configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def get_generation_settings(self):
        """Return generation settings (sizes, runs, oracles, seed, output dir)."""
        return self.config.get("generation_settings", {})

    def get_oracle_settings(self):
        """Return oracle tuning settings (iteration cap)."""
        return self.config.get("oracle_settings", {})

    def get_oracles(self):
        """Return the list of oracle labels to compare."""
        return self.get_generation_settings().get("oracles", ["deduction", "uniqueness"])
