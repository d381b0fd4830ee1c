"""Configuration — Settings loaded from env vars and YAML."""

from elastiscout.config.settings import EngineSettings, ObservabilitySettings, SearchClientSettings, Settings

__all__ = ["EngineSettings", "ObservabilitySettings", "SearchClientSettings", "Settings"]
