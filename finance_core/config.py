"""Environment-driven settings shared by the API and the console interface."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Mapping, Optional

from .exceptions import ValidationError
from .validators import validate_month_count

ENV_PREFIX = "BUDGET_TRACKER_"


def _env(environ: Mapping[str, str], name: str, default: str) -> str:
    return environ.get(ENV_PREFIX + name, default)


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    default_monthly_budget: Decimal = Decimal("1000")
    trend_months: int = 6
    env: str = "prod"
    allowed_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.env in {"dev", "development"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        try:
            default_budget = Decimal(_env(environ, "DEFAULT_MONTHLY_BUDGET", "1000"))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid {ENV_PREFIX}* setting: {exc}") from exc
        trend_months = validate_month_count(_env(environ, "TREND_MONTHS", "6"))
        origins = _env(environ, "ALLOWED_ORIGINS", "")
        return cls(
            data_dir=Path(_env(environ, "DATA_DIR", "data")),
            default_monthly_budget=default_budget,
            trend_months=trend_months,
            env=_env(environ, "ENV", "prod").lower(),
            allowed_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            log_level=_env(environ, "LOG_LEVEL", "INFO").upper(),
        )
