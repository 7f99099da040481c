"""Runtime settings for fetching and extraction.

Defaults live in module constants.  A YAML profile can override them, either
globally (``default:``) or per domain (``domains:``)::

    default:
      timeout: 15
      accept_language: en-US,en;q=0.5
    domains:
      example.com:
        timeout: 30
        user_agents:
          - "Mozilla/5.0 (X11; Linux x86_64) ..."

``READVIEW_TIMEOUT`` and ``READVIEW_SEED`` environment variables win over the
file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from readview.extractors.urlnorm import extract_domain
from readview.identity import DEFAULT_USER_AGENTS, UserAgentPool

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DOWNLOAD_TIMEOUT = 15

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"

ENV_TIMEOUT = "READVIEW_TIMEOUT"
ENV_SEED = "READVIEW_SEED"


class ReaderSettings(BaseModel):
    """Fetch configuration handed to each call."""

    timeout: float = Field(default=DOWNLOAD_TIMEOUT, gt=0)
    user_agents: list[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS))
    seed: int | None = None
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE

    @field_validator("user_agents", mode="before")
    @classmethod
    def default_agents(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        return v or list(DEFAULT_USER_AGENTS)

    def identity_pool(self) -> UserAgentPool:
        return UserAgentPool(self.user_agents, seed=self.seed)


def _domain_section(domains: Any, url: str) -> dict[str, Any]:
    """Return the longest domain key matching *url*'s host."""
    netloc = extract_domain(url)
    best_key = ""
    best_cfg: dict[str, Any] = {}
    if not netloc or not isinstance(domains, dict):
        return best_cfg
    for key, cfg in domains.items():
        if not isinstance(key, str) or not isinstance(cfg, dict):
            continue
        key_lower = key.lower()
        if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
            len(key_lower) > len(best_key)
        ):
            best_key = key_lower
            best_cfg = cfg
    return best_cfg


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    timeout = os.environ.get(ENV_TIMEOUT, "").strip()
    if timeout:
        overrides["timeout"] = timeout
    seed = os.environ.get(ENV_SEED, "").strip()
    if seed:
        overrides["seed"] = seed
    return overrides


def load_settings(path: str | Path | None = None, url: str = "") -> ReaderSettings:
    """Build :class:`ReaderSettings` from defaults, an optional YAML file and the environment.

    Raises:
        FileNotFoundError: if *path* is given but does not exist.
        pydantic.ValidationError: if a value has the wrong type or range.
    """
    merged: dict[str, Any] = {}
    if path is not None:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: top level is not a mapping", path)
            data = {}
        default = data.get("default", {})
        if isinstance(default, dict):
            merged.update(default)
        if url:
            merged.update(_domain_section(data.get("domains", {}), url))
    merged.update(_env_overrides())
    return ReaderSettings(**merged)
