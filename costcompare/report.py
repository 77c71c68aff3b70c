from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from .models import InvalidInput, Scenario, Service, UndefinedError


@dataclass(frozen=True)
class Extrema:
    cheapest: Scenario
    most_expensive: Scenario


@dataclass(frozen=True)
class ServiceSummary:
    service: Service
    extrema: Extrema
    tied_minimum: int
    scenario_count: int


@dataclass(frozen=True)
class ReportSummary:
    services: tuple[ServiceSummary, ...]
    cheaper_service: Service
    cost_delta: float
    percentage_savings: float


def percentage_savings(expensive: float, cheap: float) -> float:
    """How much cheaper `cheap` is than `expensive`, as a percentage of `expensive`."""
    if expensive == 0:
        raise UndefinedError("Savings percentage is undefined when the expensive cost is 0")
    return round((expensive - cheap) / expensive * 100, 2)


class ComparisonReport:
    """
    Read-only view over priced scenarios of both services.

    Scenarios are grouped by service; order within a service is preserved so
    ties resolve to the first scenario encountered.
    """

    def __init__(self, scenarios: Iterable[Scenario]):
        by_service: dict[Service, list[Scenario]] = {}
        for s in scenarios:
            if not s.is_priced:
                raise InvalidInput(f"Scenario at {s.average_job_duration_ms}ms has not been priced")
            by_service.setdefault(s.service, []).append(s)
        self._by_service = by_service

    def scenarios_for(self, service: Service) -> list[Scenario]:
        items = self._by_service.get(service)
        if not items:
            raise InvalidInput(f"No priced scenarios for service '{service.value}'")
        return items

    def extrema_for(self, service: Service) -> Extrema:
        items = self.scenarios_for(service)
        cheapest = items[0]
        most_expensive = items[0]
        for s in items[1:]:
            # Strict comparisons keep the first-encountered scenario on ties.
            if s.cost < cheapest.cost:
                cheapest = s
            if s.cost > most_expensive.cost:
                most_expensive = s
        return Extrema(cheapest=cheapest, most_expensive=most_expensive)

    def min_cost(self, service: Service) -> float:
        return self.extrema_for(service).cheapest.cost

    def count_tied_minimum(self, service: Service) -> int:
        lowest = self.min_cost(service)
        return sum(1 for s in self.scenarios_for(service) if s.cost == lowest)

    def cost_delta(self, service_a: Service, service_b: Service) -> float:
        return round(self.min_cost(service_a) - self.min_cost(service_b), 2)

    def summarize(self) -> ReportSummary:
        services = tuple(
            ServiceSummary(
                service=service,
                extrema=self.extrema_for(service),
                tied_minimum=self.count_tied_minimum(service),
                scenario_count=len(self.scenarios_for(service)),
            )
            for service in (Service.VM, Service.FUNCTION)
        )
        vm_min = self.min_cost(Service.VM)
        fn_min = self.min_cost(Service.FUNCTION)
        cheaper = Service.VM if vm_min <= fn_min else Service.FUNCTION
        return ReportSummary(
            services=services,
            cheaper_service=cheaper,
            cost_delta=self.cost_delta(Service.FUNCTION, Service.VM),
            percentage_savings=percentage_savings(max(vm_min, fn_min), min(vm_min, fn_min)),
        )


def _describe(s: Scenario) -> str:
    return f"${s.cost:,.2f} at {s.average_job_duration_ms:,}ms avg duration ({s.jobs_per_month:,} jobs/month)"


def format_summary(summary: ReportSummary) -> str:
    lines: list[str] = []
    for ss in summary.services:
        lines.append(f"{ss.service.label} ({ss.scenario_count:,} scenarios):")
        lines.append(f"  Cheapest:       {_describe(ss.extrema.cheapest)}")
        lines.append(f"  Most expensive: {_describe(ss.extrema.most_expensive)}")
        lines.append(f"  Scenarios tied at minimum cost: {ss.tied_minimum:,}")
    lines.append("")
    lines.append(f"Cost delta (function min - VM min): ${summary.cost_delta:,.2f}")
    lines.append(
        f"Cheaper option: {summary.cheaper_service.label} "
        f"({summary.percentage_savings:.2f}% less than the other option's minimum)"
    )
    return os.linesep.join(lines)
