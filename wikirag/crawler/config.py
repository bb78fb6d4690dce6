"""Typed crawler configuration with JSON/YAML load/save helpers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urljoin, urlparse

import yaml  # type: ignore

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_ENTRY_ID,
    DEFAULT_EXCLUDED_CATEGORIES,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_FILE_EXTENSION,
    DEFAULT_LINK_PREFIX,
    DEFAULT_NOT_FOUND_MARKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SECRET_ENV,
    DEFAULT_SUMMARY_PREFIX,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOC_ID,
    DEFAULT_USERNAME,
    DEFAULT_USER_AGENT,
    JSON_INDENT,
    SUPPORTED_CONFIG_SUFFIXES,
    WIKI_SCRIPT,
)
from .types import JSONDict


def _as_float(value: Any, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid float for '{key}': {value!r}") from exc


def _as_str(value: Any, key: str) -> str:
    if value is None:
        raise ValueError(f"Missing required string for '{key}'")
    text = str(value).strip()
    if not text:
        raise ValueError(f"'{key}' cannot be empty")
    return text


def _as_str_tuple(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    try:
        return tuple(str(item) for item in value)
    except TypeError as exc:
        raise ValueError(f"Invalid string list for '{key}': {value!r}") from exc


@dataclass(slots=True)
class CrawlConfig:
    """Top-level crawler configuration used by pipeline/session/storage."""

    base_url: str = DEFAULT_BASE_URL
    username: str = DEFAULT_USERNAME
    entry_id: str = DEFAULT_ENTRY_ID
    output_dir: str = DEFAULT_OUTPUT_DIR

    export_format: str = DEFAULT_EXPORT_FORMAT
    link_prefix: str = DEFAULT_LINK_PREFIX
    toc_id: str = DEFAULT_TOC_ID
    not_found_markers: tuple[str, ...] = DEFAULT_NOT_FOUND_MARKERS

    excluded_categories: tuple[str, ...] = DEFAULT_EXCLUDED_CATEGORIES
    file_extension: str = DEFAULT_FILE_EXTENSION
    summary_prefix: str = DEFAULT_SUMMARY_PREFIX

    timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    secret_env: str = DEFAULT_SECRET_ENV

    def __post_init__(self) -> None:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL: {self.base_url!r}")
        if not self.base_url.endswith("/"):
            self.base_url += "/"

        self.username = _as_str(self.username, "username")
        self.entry_id = _as_str(self.entry_id, "entry_id")
        self.link_prefix = _as_str(self.link_prefix, "link_prefix")

        if not self.not_found_markers:
            raise ValueError("not_found_markers must contain at least one marker")
        if not self.file_extension.startswith("."):
            raise ValueError("file_extension must start with '.'")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when set")

        self.not_found_markers = tuple(self.not_found_markers)
        self.excluded_categories = tuple(self.excluded_categories)

    @property
    def script_url(self) -> str:
        """Absolute URL of the wiki script used for login and export."""

        return urljoin(self.base_url, WIKI_SCRIPT)

    def read_secret(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the login password from the configured environment variable."""

        env = os.environ if environ is None else environ
        secret = env.get(self.secret_env, "")
        if not secret:
            raise ValueError(f"Environment variable '{self.secret_env}' is not set")
        return secret

    def to_dict(self) -> JSONDict:
        """Serialize config for logs and reproducibility. Never includes the secret."""

        return {
            "base_url": self.base_url,
            "username": self.username,
            "entry_id": self.entry_id,
            "output_dir": self.output_dir,
            "export_format": self.export_format,
            "link_prefix": self.link_prefix,
            "toc_id": self.toc_id,
            "not_found_markers": list(self.not_found_markers),
            "excluded_categories": list(self.excluded_categories),
            "file_extension": self.file_extension,
            "summary_prefix": self.summary_prefix,
            "timeout_seconds": self.timeout_seconds,
            "user_agent": self.user_agent,
            "secret_env": self.secret_env,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CrawlConfig":
        """Build config from a parsed dictionary."""

        return cls(
            base_url=str(payload.get("base_url", DEFAULT_BASE_URL)),
            username=str(payload.get("username", DEFAULT_USERNAME)),
            entry_id=str(payload.get("entry_id", DEFAULT_ENTRY_ID)),
            output_dir=str(payload.get("output_dir", DEFAULT_OUTPUT_DIR)),
            export_format=str(payload.get("export_format", DEFAULT_EXPORT_FORMAT)),
            link_prefix=str(payload.get("link_prefix", DEFAULT_LINK_PREFIX)),
            toc_id=str(payload.get("toc_id", DEFAULT_TOC_ID)),
            not_found_markers=_as_str_tuple(
                payload.get("not_found_markers", DEFAULT_NOT_FOUND_MARKERS),
                "not_found_markers",
            ),
            excluded_categories=_as_str_tuple(
                payload.get("excluded_categories", DEFAULT_EXCLUDED_CATEGORIES),
                "excluded_categories",
            ),
            file_extension=str(payload.get("file_extension", DEFAULT_FILE_EXTENSION)),
            summary_prefix=str(payload.get("summary_prefix", DEFAULT_SUMMARY_PREFIX)),
            timeout_seconds=_as_float(
                payload.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
                "timeout_seconds",
            ),
            user_agent=str(payload.get("user_agent", DEFAULT_USER_AGENT)),
            secret_env=str(payload.get("secret_env", DEFAULT_SECRET_ENV)),
        )


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML config at {path} must be a mapping at top level")
    return data


def load_config(path: str | Path) -> CrawlConfig:
    """Load CrawlConfig from JSON/YAML path."""

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_CONFIG_SUFFIXES:
        raise ValueError(
            f"Unsupported config suffix '{suffix}'. Supported: {SUPPORTED_CONFIG_SUFFIXES}"
        )

    if suffix == ".json":
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    else:
        payload = _load_yaml(config_path)

    if not isinstance(payload, dict):
        raise ValueError(f"Config at {config_path} must be a mapping")

    return CrawlConfig.from_dict(payload)


def save_config(config: CrawlConfig, path: str | Path) -> None:
    """Save CrawlConfig as JSON or YAML based on file extension."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = out_path.suffix.lower()
    payload = config.to_dict()

    if suffix == ".json":
        out_path.write_text(
            json.dumps(payload, indent=JSON_INDENT, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return

    if suffix in {".yaml", ".yml"}:
        out_path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
        return

    raise ValueError(
        f"Unsupported config suffix '{suffix}'. Supported: {SUPPORTED_CONFIG_SUFFIXES}"
    )


__all__ = [
    "CrawlConfig",
    "load_config",
    "save_config",
]
