from __future__ import annotations

import pytest

from costcompare.cost_models import (
    billable,
    function_cost_breakdown,
    function_monthly_cost,
    vm_monthly_cost,
)
from costcompare.models import InvalidInput
from costcompare.pricing import FunctionPricing, VmPricing


def test_billable_clamps_at_zero():
    assert billable(10, 4) == 6
    assert billable(4, 4) == 0
    assert billable(1, 4) == 0
    assert billable(0, 0) == 0


def test_vm_monthly_cost_canonical():
    assert vm_monthly_cost() == 3.02
    assert vm_monthly_cost(VmPricing(hourly_price=0.0042)) == 3.02


def test_vm_monthly_cost_other_price():
    # 0.0104 * 720 = 7.488
    assert vm_monthly_cost(VmPricing(hourly_price=0.0104)) == 7.49
    assert vm_monthly_cost(VmPricing(hourly_price=0.0)) == 0.0


def test_function_cost_one_ms_jobs():
    assert function_monthly_cost(5_184_000_000, 1) == pytest.approx(1073.13, abs=0.01)


def test_function_cost_fifteen_minute_jobs():
    assert function_monthly_cost(5760, 900_000) == pytest.approx(36.53, abs=0.01)


def test_function_cost_zero_inputs():
    assert function_monthly_cost(0, 1000) == 0.0
    assert function_monthly_cost(1_000_000, 0) == 0.0
    assert function_monthly_cost(0, 0) == 0.0


def test_function_cost_within_free_tier():
    # 100k requests * 1s * 0.5GB = 50k GB-s, well under both free tiers
    assert function_monthly_cost(100_000, 1000) == 0.0


@pytest.mark.parametrize(
    "requests, duration_ms",
    [(1, 1), (999_999, 10), (1_000_001, 1), (50_000_000, 250), (10**10, 0.5), (3, 900_000)],
)
def test_function_cost_non_negative(requests, duration_ms):
    assert function_monthly_cost(requests, duration_ms) >= 0.0


def test_function_cost_rejects_negative_inputs():
    with pytest.raises(InvalidInput, match="requests_per_month"):
        function_monthly_cost(-1, 10)
    with pytest.raises(InvalidInput, match="avg_duration_ms"):
        function_monthly_cost(10, -1)


def test_breakdown_line_items():
    b = function_cost_breakdown(5_184_000_000, 1)
    assert b.compute_seconds == pytest.approx(5_184_000)
    assert b.billable_gb_seconds == pytest.approx(2_192_000)
    assert b.billable_requests == 5_183_000_000
    # Default ephemeral storage sits exactly at the free tier
    assert b.billable_ephemeral_storage_gb == 0
    assert b.ephemeral_storage_cost == 0.0
    assert b.request_cost == pytest.approx(1036.60, abs=0.01)
    assert b.compute_cost == pytest.approx(36.53, abs=0.01)
    assert b.total == pytest.approx(1073.13, abs=0.01)


def test_breakdown_charges_extra_ephemeral_storage():
    pricing = FunctionPricing(ephemeral_storage_mb=10240)
    b = function_cost_breakdown(5760, 900_000, pricing)
    # 9.5 billable GB * 5,184,000 s * 0.0000000309
    assert b.billable_ephemeral_storage_gb == pytest.approx(9.5)
    assert b.ephemeral_storage_cost == pytest.approx(1.52, abs=0.01)
    assert b.total == pytest.approx(36.53 + 1.52, abs=0.02)


def test_function_cost_scales_with_memory():
    small = function_monthly_cost(5760, 900_000, FunctionPricing(memory_mb=512))
    large = function_monthly_cost(5760, 900_000, FunctionPricing(memory_mb=1024))
    assert large > small
    # (5,184,000 - 400,000) GB-s * 0.0000166667
    assert large == pytest.approx(79.73, abs=0.01)
