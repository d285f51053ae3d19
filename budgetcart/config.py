"""Configuration and scenario loading for the budgetcart harness."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from budgetcart.errors import ConfigurationError
from budgetcart.logging_config import get_logger
from budgetcart.schemas import Scenario

LOGGER = get_logger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PACKAGE_DIR / "config.yml"
DEFAULT_SCENARIOS_PATH = PACKAGE_DIR / "scenarios.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "base_url": "https://www.ebay.com",
    "cart_url": "https://cart.ebay.com/",
    "signin_url": "https://signin.ebay.com/",
    "timeout": {
        "default": 30000,
        "navigation": 60000,
        "element": 10000,
    },
    "currency": {
        "symbol": "$",
        "code": "USD",
    },
    "pagination": {
        "max_pages": 10,
    },
    "screenshots": {
        "path": "test-results/screenshots",
    },
    "report": {
        "path": "test-results/report.jsonl",
    },
    "healthcheck_url": "",
}


def _deep_merge(default: Any, override: Any) -> Any:
    if not isinstance(default, dict) or not isinstance(override, dict):
        return deepcopy(override)

    merged: dict[str, Any] = deepcopy(default)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _validate_config(config: dict[str, Any]) -> None:
    try:
        max_pages = int(config["pagination"]["max_pages"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError("pagination.max_pages must be an integer") from exc
    if max_pages < 1:
        raise ConfigurationError("pagination.max_pages must be at least 1")

    for key in ("default", "navigation", "element"):
        value = (config.get("timeout") or {}).get(key)
        if not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"timeout.{key} must be a positive integer (ms)")

    if not str(config.get("base_url") or "").startswith("http"):
        raise ConfigurationError("base_url must be an absolute http(s) URL")


def _read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        try:
            return yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load YAML overrides from *path* on top of ``DEFAULT_CONFIG``."""

    path = path or DEFAULT_CONFIG_PATH
    if path.exists():
        data = _read_yaml(path)
    else:
        LOGGER.warning("Configuration file %s not found; using defaults", path)
        data = {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")

    merged = _deep_merge(DEFAULT_CONFIG, data) if data else deepcopy(DEFAULT_CONFIG)
    _validate_config(merged)
    return merged


def load_scenarios(path: Path | None = None) -> list[Scenario]:
    """Read and validate the ``scenarios`` list from a YAML file."""

    path = path or DEFAULT_SCENARIOS_PATH
    if not path.exists():
        raise ConfigurationError(f"Scenario file not found: {path}")
    data = _read_yaml(path)

    entries = data.get("scenarios") if isinstance(data, dict) else None
    if not entries:
        raise ConfigurationError(f"No scenarios defined in {path}")

    scenarios: list[Scenario] = []
    for index, entry in enumerate(entries, start=1):
        try:
            scenarios.append(Scenario.model_validate(entry or {}))
        except ValidationError as exc:
            raise ConfigurationError(f"Scenario #{index} in {path} is invalid: {exc}") from exc

    names = [scenario.name for scenario in scenarios]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate scenario names in {path}: {', '.join(duplicates)}")
    return scenarios
