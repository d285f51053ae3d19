"""Data validation schemas for scenarios and run results."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Scenario(BaseModel):
    """One data-driven shopping run: what to search and how much to spend per item."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    description: str = ""
    query: str
    max_price: Decimal = Field(gt=0)
    limit: int = Field(default=5, ge=1)

    @field_validator("name", "query", mode="before")
    @classmethod
    def _strip_required(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("must not be blank")
        return text


class ScenarioResult(BaseModel):
    """Outcome of one scenario, written to the run report."""

    model_config = ConfigDict(extra="ignore")

    scenario: str
    query: str
    max_price: Decimal
    limit: int
    passed: bool = False
    error: str | None = None
    urls: list[str] = Field(default_factory=list)
    added: int = 0
    failed: int = 0
    cart_total: Decimal | None = None
    cart_count: int | None = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @classmethod
    def for_scenario(cls, scenario: Scenario) -> "ScenarioResult":
        return cls(
            scenario=scenario.name,
            query=scenario.query,
            max_price=scenario.max_price,
            limit=scenario.limit,
        )
