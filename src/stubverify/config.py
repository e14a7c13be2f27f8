"""
StubVerify Client Configuration

Connection settings for the mock server's admin API, loadable from a YAML
file or from environment variables.

Example YAML:

    host: wiremock.internal
    port: 9090
    scheme: https
    url_path_prefix: /mocks
    timeout: 10
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080


@dataclass
class ClientConfig:
    """Configuration for talking to a mock server admin API."""

    # Server location
    scheme: str = "http"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    url_path_prefix: str = ""  # Mount point when the server runs behind a context path

    # Transport behavior
    timeout: int = 30  # Request timeout in seconds
    max_retries: int = 3  # Retry attempts for idempotent admin calls
    verify_ssl: bool = True

    # Logging
    log_level: str = "info"

    @property
    def base_url(self) -> str:
        prefix = self.url_path_prefix.strip('/')
        base = f"{self.scheme}://{self.host}:{self.port}"
        return f"{base}/{prefix}" if prefix else base

    @property
    def admin_url(self) -> str:
        return f"{self.base_url}/__admin"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """Create config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.port = int(config.port)
        config.timeout = int(config.timeout)
        config.max_retries = int(config.max_retries)
        return config

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ClientConfig':
        """
        Load config from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the YAML document is not a mapping
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Unexpected config format in {path}. "
                f"Expected a mapping, got {type(data).__name__}"
            )

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = "STUBVERIFY_", environ: Optional[Dict[str, str]] = None) -> 'ClientConfig':
        """Load config from environment variables such as STUBVERIFY_HOST and STUBVERIFY_PORT."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        for f in fields(cls):
            raw = environ.get(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            if f.type in (bool, 'bool'):
                data[f.name] = raw.strip().lower() in ('1', 'true', 'yes', 'on')
            else:
                data[f.name] = raw

        return cls.from_dict(data)
