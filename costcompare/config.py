from __future__ import annotations

import multiprocessing
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .pricing import FunctionPricing, VmPricing

TRUTHY = ("true", "1", "yes", "on", "enabled")


def _expand(p: str) -> Path:
    return Path(os.path.expanduser(p)).resolve()


def _cpu_count() -> int:
    try:
        return multiprocessing.cpu_count()
    except NotImplementedError:
        return 1


def _clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


def _env_number(env: Mapping[str, str], key: str, default: str, cast: type) -> int | float:
    raw = str(env.get(key, "")).strip() or default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {raw!r} (expected {cast.__name__})") from None


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = str(env.get(key, "")).strip().lower()
    if not raw:
        return default
    return raw in TRUTHY


@dataclass(frozen=True)
class Config:
    duration_min_ms: int
    duration_max_ms: int

    vm_hourly_price: float
    vm_vcpu_count: int

    function_memory_mb: int
    ephemeral_storage_mb: int

    output_dir: Path
    charts_enabled: bool
    workers: int

    @property
    def vm_pricing(self) -> VmPricing:
        return VmPricing(hourly_price=self.vm_hourly_price, vcpu_count=self.vm_vcpu_count)

    @property
    def function_pricing(self) -> FunctionPricing:
        return FunctionPricing(
            memory_mb=self.function_memory_mb,
            ephemeral_storage_mb=self.ephemeral_storage_mb,
        )

    @property
    def log_path(self) -> Path:
        return self.output_dir / "costcompare.log"


def load_config(
    *,
    duration_min_ms: int | None = None,
    duration_max_ms: int | None = None,
    vm_hourly_price: float | None = None,
    vm_vcpu_count: int | None = None,
    function_memory_mb: int | None = None,
    ephemeral_storage_mb: int | None = None,
    output_dir: str | None = None,
    charts_enabled: bool | None = None,
    workers: int | None = None,
) -> Config:
    env = os.environ

    duration_min_ms = int(
        duration_min_ms
        if duration_min_ms is not None
        else _env_number(env, "COSTCOMPARE_DURATION_MIN_MS", "1", int)
    )
    duration_max_ms = int(
        duration_max_ms
        if duration_max_ms is not None
        else _env_number(env, "COSTCOMPARE_DURATION_MAX_MS", "900000", int)
    )

    vm_hourly_price = float(
        vm_hourly_price
        if vm_hourly_price is not None
        else _env_number(env, "COSTCOMPARE_VM_HOURLY_PRICE", "0.0042", float)
    )
    vm_vcpu_count = int(
        vm_vcpu_count if vm_vcpu_count is not None else _env_number(env, "COSTCOMPARE_VM_VCPUS", "2", int)
    )

    function_memory_mb = int(
        function_memory_mb
        if function_memory_mb is not None
        else _env_number(env, "COSTCOMPARE_FUNCTION_MEMORY_MB", "512", int)
    )
    ephemeral_storage_mb = int(
        ephemeral_storage_mb
        if ephemeral_storage_mb is not None
        else _env_number(env, "COSTCOMPARE_EPHEMERAL_STORAGE_MB", "512", int)
    )

    output_dir = output_dir or env.get("COSTCOMPARE_OUTPUT_DIR", "~/costcompare")

    if charts_enabled is None:
        charts_enabled = _env_bool(env, "COSTCOMPARE_CHARTS", True)

    # Pricing is CPU bound; more workers than cores only adds overhead.
    workers = int(workers if workers is not None else _env_number(env, "COSTCOMPARE_WORKERS", "1", int))
    workers = _clamp(workers, 1, _cpu_count())

    cfg = Config(
        duration_min_ms=duration_min_ms,
        duration_max_ms=duration_max_ms,
        vm_hourly_price=vm_hourly_price,
        vm_vcpu_count=vm_vcpu_count,
        function_memory_mb=function_memory_mb,
        ephemeral_storage_mb=ephemeral_storage_mb,
        output_dir=_expand(output_dir),
        charts_enabled=bool(charts_enabled),
        workers=workers,
    )

    if cfg.charts_enabled:
        cfg.output_dir.mkdir(parents=True, exist_ok=True)
    return cfg
