from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace
from typing import Iterator, Sequence

from .cost_models import function_monthly_cost, vm_monthly_cost
from .models import InvalidInput, Scenario, Service
from .pricing import (
    DEFAULT_FUNCTION_PRICING,
    DEFAULT_VM_PRICING,
    MILLISECONDS_PER_MONTH,
    FunctionPricing,
    VmPricing,
)


@dataclass(frozen=True)
class DurationRange:
    """Inclusive range of average job durations, in milliseconds."""

    lower: int = 1
    upper: int = 900_000

    def __post_init__(self) -> None:
        if self.lower < 1:
            raise InvalidInput(f"Duration range must start at >= 1ms (got {self.lower})")
        if self.upper < self.lower:
            raise InvalidInput(f"Invalid duration range {self.lower}..{self.upper} (upper < lower)")

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.lower, self.upper + 1))

    def __len__(self) -> int:
        return self.upper - self.lower + 1


def jobs_per_month(duration_ms: int, vcpu_count: int) -> int:
    """Jobs a VM with `vcpu_count` busy vCPUs completes in a month at this duration."""
    if duration_ms <= 0:
        raise InvalidInput(f"duration_ms must be > 0 (got {duration_ms})")
    if vcpu_count <= 0:
        raise InvalidInput(f"vcpu_count must be > 0 (got {vcpu_count})")
    return round(MILLISECONDS_PER_MONTH / duration_ms * vcpu_count)


def generate_scenarios(duration_range: DurationRange, vcpu_count: int) -> list[Scenario]:
    if vcpu_count <= 0:
        raise InvalidInput(f"vcpu_count must be > 0 (got {vcpu_count})")
    return [
        Scenario(average_job_duration_ms=d, jobs_per_month=jobs_per_month(d, vcpu_count))
        for d in duration_range
    ]


def _price_chunk(
    chunk: Sequence[Scenario],
    service: Service,
    vm_pricing: VmPricing,
    function_pricing: FunctionPricing,
) -> list[Scenario]:
    if service is Service.VM:
        # Duration independent: one figure for the whole sweep.
        cost = vm_monthly_cost(vm_pricing)
        return [replace(s, cost=cost, service=service) for s in chunk]
    return [
        replace(
            s,
            cost=function_monthly_cost(s.jobs_per_month, s.average_job_duration_ms, function_pricing),
            service=service,
        )
        for s in chunk
    ]


def _chunks(items: Sequence[Scenario], n: int) -> list[Sequence[Scenario]]:
    size = max(1, -(-len(items) // n))
    return [items[i : i + size] for i in range(0, len(items), size)]


def price_scenarios(
    scenarios: Sequence[Scenario],
    service: Service,
    *,
    vm_pricing: VmPricing = DEFAULT_VM_PRICING,
    function_pricing: FunctionPricing = DEFAULT_FUNCTION_PRICING,
    workers: int = 1,
) -> list[Scenario]:
    """Return priced copies of `scenarios` for one service, in input order.

    Each scenario is independent, so with workers > 1 the sweep is split into
    contiguous chunks and priced in worker processes. Results are identical to
    the serial path.
    """
    if workers <= 1 or len(scenarios) < 2:
        return _price_chunk(scenarios, service, vm_pricing, function_pricing)

    chunks = _chunks(list(scenarios), workers)
    priced: list[Scenario] = []
    with ProcessPoolExecutor(max_workers=min(workers, len(chunks))) as ex:
        # map() yields in submission order.
        for part in ex.map(
            _price_chunk,
            chunks,
            [service] * len(chunks),
            [vm_pricing] * len(chunks),
            [function_pricing] * len(chunks),
        ):
            priced.extend(part)
    return priced
