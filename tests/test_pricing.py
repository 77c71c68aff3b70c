from __future__ import annotations

import dataclasses

import pytest

from costcompare.models import InvalidInput, Scenario, Service
from costcompare.pricing import (
    DEFAULT_FUNCTION_PRICING,
    DEFAULT_VM_PRICING,
    MB_TO_GB,
    FunctionPricing,
    VmPricing,
)


def test_default_pricing():
    assert DEFAULT_VM_PRICING.hourly_price == 0.0042
    assert DEFAULT_VM_PRICING.vcpu_count == 2
    assert DEFAULT_FUNCTION_PRICING.memory_mb == 512
    assert DEFAULT_FUNCTION_PRICING.free_requests == 1_000_000
    assert DEFAULT_FUNCTION_PRICING.free_compute_gb_seconds == 400_000


def test_mb_to_gb():
    assert MB_TO_GB * 1024 == 1.0
    assert DEFAULT_FUNCTION_PRICING.memory_gb == 0.5
    assert DEFAULT_FUNCTION_PRICING.ephemeral_storage_gb == 0.5


def test_pricing_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_VM_PRICING.hourly_price = 1.0  # type: ignore[misc]


def test_pricing_validation():
    with pytest.raises(InvalidInput, match="hourly_price"):
        VmPricing(hourly_price=-0.01)
    with pytest.raises(InvalidInput, match="vcpu_count"):
        VmPricing(vcpu_count=0)
    with pytest.raises(InvalidInput, match="memory_mb"):
        FunctionPricing(memory_mb=0)
    with pytest.raises(InvalidInput, match="free_requests"):
        FunctionPricing(free_requests=-1)


def test_scenario_value_object():
    s = Scenario(average_job_duration_ms=10, jobs_per_month=100)
    assert not s.is_priced
    priced = dataclasses.replace(s, cost=1.5, service=Service.FUNCTION)
    assert priced.is_priced
    assert s.cost is None
    assert Service.VM.label == "Virtual machine"
    assert Service("function") is Service.FUNCTION
