from __future__ import annotations

from dataclasses import dataclass

from .models import InvalidInput
from .pricing import (
    DAYS_PER_MONTH,
    DEFAULT_FUNCTION_PRICING,
    DEFAULT_VM_PRICING,
    HOURS_PER_DAY,
    FunctionPricing,
    VmPricing,
)


def billable(consumed: float, free_tier: float) -> float:
    """Usage left over after the free tier, never below zero."""
    return max(0, consumed - free_tier)


def vm_monthly_cost(pricing: VmPricing = DEFAULT_VM_PRICING) -> float:
    return round(pricing.hourly_price * HOURS_PER_DAY * DAYS_PER_MONTH, 2)


@dataclass(frozen=True)
class FunctionCostBreakdown:
    requests_per_month: int
    avg_duration_ms: float
    compute_seconds: float
    billable_gb_seconds: float
    billable_requests: float
    billable_ephemeral_storage_gb: float
    compute_cost: float
    request_cost: float
    ephemeral_storage_cost: float
    total: float


def function_cost_breakdown(
    requests_per_month: int,
    avg_duration_ms: float,
    pricing: FunctionPricing = DEFAULT_FUNCTION_PRICING,
) -> FunctionCostBreakdown:
    """Itemize the monthly function-service bill for one workload.

    Args:
        requests_per_month: Invocations per month
        avg_duration_ms: Average billed duration of one invocation

    Returns:
        FunctionCostBreakdown whose line items are rounded to cents. `total` is
        rounded from the unrounded line items, so it can differ by a cent from
        the sum of the displayed items.
    """
    if requests_per_month < 0:
        raise InvalidInput(f"requests_per_month must be >= 0 (got {requests_per_month})")
    if avg_duration_ms < 0:
        raise InvalidInput(f"avg_duration_ms must be >= 0 (got {avg_duration_ms})")

    compute_seconds = requests_per_month * avg_duration_ms * 0.001

    billable_gb_seconds = billable(pricing.memory_gb * compute_seconds, pricing.free_compute_gb_seconds)
    compute_cost = billable_gb_seconds * pricing.execution_price_per_gb_second

    billable_requests = billable(requests_per_month, pricing.free_requests)
    request_cost = billable_requests * pricing.request_price

    billable_storage_gb = billable(pricing.ephemeral_storage_gb, pricing.free_ephemeral_storage_gb)
    ephemeral_storage_cost = (
        billable_storage_gb * compute_seconds * pricing.ephemeral_storage_price_per_gb_second
    )

    return FunctionCostBreakdown(
        requests_per_month=requests_per_month,
        avg_duration_ms=avg_duration_ms,
        compute_seconds=compute_seconds,
        billable_gb_seconds=billable_gb_seconds,
        billable_requests=billable_requests,
        billable_ephemeral_storage_gb=billable_storage_gb,
        compute_cost=round(compute_cost, 2),
        request_cost=round(request_cost, 2),
        ephemeral_storage_cost=round(ephemeral_storage_cost, 2),
        total=round(compute_cost + request_cost + ephemeral_storage_cost, 2),
    )


def function_monthly_cost(
    requests_per_month: int,
    avg_duration_ms: float,
    pricing: FunctionPricing = DEFAULT_FUNCTION_PRICING,
) -> float:
    return function_cost_breakdown(requests_per_month, avg_duration_ms, pricing).total
