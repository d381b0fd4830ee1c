"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if loaded through ``Settings.from_yaml``)
  2. Environment variables (ELASTISCOUT_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class SearchClientSettings(BaseModel):
    """Connection to the Elasticsearch-compatible cluster."""

    backend: Literal["http", "opensearch"] = Field(default="http", description="Search client adapter")
    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Cluster node URLs")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="Encoded API key")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    index_prefix: str = Field(default="", description="Prefix prepended to every index name")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class EngineSettings(BaseModel):
    """Search pipeline behavior."""

    key_delimiter: str = Field(default="_", min_length=1, description="Separator between hit id prefix and record key")
    highlight: bool = Field(default=True, description="Attach rule highlight fragments by default")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the ELASTISCOUT_ prefix.
    Nested settings use double underscores.

    Example:
        ELASTISCOUT_SEARCH__BACKEND=opensearch
        ELASTISCOUT_SEARCH__HOSTS='["https://es-1:9200", "https://es-2:9200"]'
        ELASTISCOUT_ENGINE__KEY_DELIMITER=_
    """

    model_config = {
        "env_prefix": "ELASTISCOUT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    search: SearchClientSettings = Field(default_factory=SearchClientSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file override environment variables; anything the
        file leaves out is still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
