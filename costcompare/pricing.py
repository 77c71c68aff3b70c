"""
Pricing tables for the two compute options being compared.

VM: on-demand Linux, us-east-1 (t4g.nano, 2 vCPU).
Function service: us-east-1 x86 pricing, with the monthly free tier.

Sources:
- https://aws.amazon.com/ec2/pricing/on-demand/
- https://aws.amazon.com/lambda/pricing/
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import InvalidInput

HOURS_PER_DAY = 24
DAYS_PER_MONTH = 30
MILLISECONDS_PER_MONTH = HOURS_PER_DAY * DAYS_PER_MONTH * 3600 * 1000

# 1 / 1024
MB_TO_GB = 0.0009765625


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise InvalidInput(f"{name} must be >= 0 (got {value})")


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise InvalidInput(f"{name} must be > 0 (got {value})")


@dataclass(frozen=True)
class VmPricing:
    instance_type: str = "t4g.nano"
    hourly_price: float = 0.0042
    vcpu_count: int = 2

    def __post_init__(self) -> None:
        _require_non_negative(hourly_price=self.hourly_price)
        _require_positive(vcpu_count=self.vcpu_count)


@dataclass(frozen=True)
class FunctionPricing:
    request_price: float = 0.0000002  # $0.20 per 1M requests
    execution_price_per_gb_second: float = 0.0000166667
    memory_mb: int = 512
    ephemeral_storage_mb: int = 512
    ephemeral_storage_price_per_gb_second: float = 0.0000000309

    # Free tier (per month)
    free_compute_gb_seconds: float = 400_000
    free_requests: int = 1_000_000
    free_ephemeral_storage_gb: float = 0.5

    def __post_init__(self) -> None:
        _require_non_negative(
            request_price=self.request_price,
            execution_price_per_gb_second=self.execution_price_per_gb_second,
            ephemeral_storage_mb=self.ephemeral_storage_mb,
            ephemeral_storage_price_per_gb_second=self.ephemeral_storage_price_per_gb_second,
            free_compute_gb_seconds=self.free_compute_gb_seconds,
            free_requests=self.free_requests,
            free_ephemeral_storage_gb=self.free_ephemeral_storage_gb,
        )
        _require_positive(memory_mb=self.memory_mb)

    @property
    def memory_gb(self) -> float:
        return self.memory_mb * MB_TO_GB

    @property
    def ephemeral_storage_gb(self) -> float:
        return self.ephemeral_storage_mb * MB_TO_GB


DEFAULT_VM_PRICING = VmPricing()
DEFAULT_FUNCTION_PRICING = FunctionPricing()
