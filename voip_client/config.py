"""
This module provides configuration management for the VOIP API client.

Classes:
    ClientConfig: Endpoint, credentials and transport options for a VoipClient.

Functions:
    load_config(path: Path) -> ClientConfig:
        Loads a client configuration from a YAML file.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict

import httpx
import yaml

from .client import VoipClient
from .errors import ConfigurationError


@dataclass(frozen=True)
class ClientConfig:
    endpoint: str
    username: str
    password: str
    debug: bool = False
    timeout: float = 10

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ClientConfig":
        try:
            return ClientConfig(
                endpoint=str(data["endpoint"]),
                username=str(data["username"]),
                password=str(data["password"]),
                debug=bool(data.get("debug", False)),
                timeout=float(data.get("timeout") or 10),
            )
        except KeyError as ke:
            raise ConfigurationError(f"Missing key {ke} in client configuration") from ke
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    def with_overrides(self, **overrides: Any) -> "ClientConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def create_client(
        self,
        *,
        logger: logging.Logger | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> VoipClient:
        return VoipClient(
            self.endpoint,
            self.username,
            self.password,
            self.debug,
            timeout=self.timeout,
            logger=logger,
            transport=transport,
        )


def load_config(path: Path) -> ClientConfig:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return ClientConfig.from_dict(raw)
