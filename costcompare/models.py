from __future__ import annotations

import enum
from dataclasses import dataclass


class CostModelError(ValueError):
    pass


class InvalidInput(CostModelError):
    """Raised for negative or zero inputs where a positive value is required."""


class UndefinedError(CostModelError):
    """Raised when a derived figure has no meaning (e.g. savings against a zero cost)."""


class Service(enum.Enum):
    VM = "vm"
    FUNCTION = "function"

    @property
    def label(self) -> str:
        return "Virtual machine" if self is Service.VM else "Function service"


@dataclass(frozen=True)
class Scenario:
    average_job_duration_ms: int
    jobs_per_month: int
    cost: float | None = None
    service: Service | None = None

    @property
    def is_priced(self) -> bool:
        return self.cost is not None and self.service is not None
