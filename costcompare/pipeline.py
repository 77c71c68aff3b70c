from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from .charts import plot_costs, plot_jobs
from .config import Config
from .models import Scenario, Service
from .report import ComparisonReport, ReportSummary
from .scenarios import DurationRange, generate_scenarios, price_scenarios


@dataclass(frozen=True)
class ComparisonResult:
    vm_scenarios: list[Scenario]
    function_scenarios: list[Scenario]
    report: ComparisonReport
    summary: ReportSummary
    chart_paths: list[Path]


def run_comparison(*, cfg: Config, logger: logging.Logger) -> ComparisonResult:
    """
    generate -> price VM -> price function -> compare -> (charts)

    Each stage takes the previous stage's output; nothing is shared between runs.
    """
    duration_range = DurationRange(cfg.duration_min_ms, cfg.duration_max_ms)
    vm_pricing = cfg.vm_pricing
    function_pricing = cfg.function_pricing

    logger.info(
        f"Sweeping average job duration {duration_range.lower:,}..{duration_range.upper:,}ms "
        f"({len(duration_range):,} scenarios, {vm_pricing.vcpu_count} vCPU {vm_pricing.instance_type})"
    )

    t0 = time.time()
    scenarios = generate_scenarios(duration_range, vm_pricing.vcpu_count)
    logger.debug(f"Generated {len(scenarios):,} scenarios in {time.time() - t0:.2f}s")

    t0 = time.time()
    vm_scenarios = price_scenarios(
        scenarios, Service.VM, vm_pricing=vm_pricing, function_pricing=function_pricing, workers=cfg.workers
    )
    logger.debug(f"Priced VM scenarios in {time.time() - t0:.2f}s")

    t0 = time.time()
    function_scenarios = price_scenarios(
        scenarios,
        Service.FUNCTION,
        vm_pricing=vm_pricing,
        function_pricing=function_pricing,
        workers=cfg.workers,
    )
    logger.debug(f"Priced function scenarios in {time.time() - t0:.2f}s ({cfg.workers} workers)")

    report = ComparisonReport(vm_scenarios + function_scenarios)
    summary = report.summarize()

    chart_paths: list[Path] = []
    if cfg.charts_enabled:
        t0 = time.time()
        chart_paths.append(plot_costs(vm_scenarios + function_scenarios, cfg.output_dir / "monthly_cost.png"))
        chart_paths.append(plot_jobs(function_scenarios, cfg.output_dir / "jobs_per_month.png"))
        logger.debug(f"Rendered {len(chart_paths)} charts in {time.time() - t0:.2f}s")
        for p in chart_paths:
            logger.info(f"Chart written: {p}")

    return ComparisonResult(
        vm_scenarios=vm_scenarios,
        function_scenarios=function_scenarios,
        report=report,
        summary=summary,
        chart_paths=chart_paths,
    )
