from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from .models import InvalidInput, Scenario, Service

CHART_DPI = 120
MAX_POINTS = 5000

SERVICE_COLORS = {
    Service.VM: "#1f77b4",
    Service.FUNCTION: "#ff7f0e",
}


def _sample_indices(n: int, max_points: int) -> np.ndarray:
    """Evenly spaced indices into a series of length n, always keeping both ends."""
    if n <= max_points:
        return np.arange(n)
    return np.unique(np.linspace(0, n - 1, max_points).round().astype(np.int64))


def _series(scenarios: Sequence[Scenario], service: Service | None, field: str, max_points: int):
    picked = [s for s in scenarios if service is None or s.service is service]
    if not picked:
        return None, None
    idx = _sample_indices(len(picked), max_points)
    x = np.fromiter((picked[i].average_job_duration_ms for i in idx), dtype=np.float64, count=len(idx))
    y = np.fromiter((getattr(picked[i], field) for i in idx), dtype=np.float64, count=len(idx))
    return x, y


def plot_costs(scenarios: Sequence[Scenario], path: Path, *, max_points: int = MAX_POINTS) -> Path:
    """Monthly cost against average job duration, one line per service."""
    fig, ax = plt.subplots(figsize=(12, 7))
    try:
        plotted = 0
        for service in (Service.VM, Service.FUNCTION):
            x, y = _series(scenarios, service, "cost", max_points)
            if x is None:
                continue
            ax.plot(x, y, label=service.label, color=SERVICE_COLORS[service], linewidth=1.5)
            plotted += 1
        if not plotted:
            raise InvalidInput("No priced scenarios to chart")

        ax.set_xscale("log")
        ax.set_xlabel("Average job duration (ms)")
        ax.set_ylabel("Monthly cost (USD)")
        ax.set_title("Monthly cost at full VM capacity")
        ax.grid(True, which="both", alpha=0.3)
        ax.legend()
        fig.tight_layout()

        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=CHART_DPI, bbox_inches="tight")
    finally:
        plt.close(fig)
    return path


def plot_jobs(scenarios: Sequence[Scenario], path: Path, *, max_points: int = MAX_POINTS) -> Path:
    """Jobs per month a fully busy VM completes, against average job duration."""
    # Job volume does not depend on the service; use the first service present.
    services = [s.service for s in scenarios[:1]]
    x, y = _series(scenarios, services[0] if services else None, "jobs_per_month", max_points)
    if x is None:
        raise InvalidInput("No scenarios to chart")

    fig, ax = plt.subplots(figsize=(12, 7))
    try:
        ax.plot(x, y, color="#2ca02c", linewidth=1.5)
        ax.set_xscale("log")
        ax.set_yscale("log")
        ax.set_xlabel("Average job duration (ms)")
        ax.set_ylabel("Jobs per month")
        ax.set_title("Implied monthly job volume")
        ax.grid(True, which="both", alpha=0.3)
        fig.tight_layout()

        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=CHART_DPI, bbox_inches="tight")
    finally:
        plt.close(fig)
    return path
