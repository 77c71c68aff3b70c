from __future__ import annotations

import argparse
import os
import sys

from .config import load_config
from .cost_models import function_cost_breakdown, vm_monthly_cost
from .logging_utils import attach_run_logfile, setup_logging
from .models import CostModelError
from .pipeline import run_comparison
from .pricing import FunctionPricing, VmPricing
from .report import format_summary, percentage_savings


def _add_pricing_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--vcpus", type=int, default=None, help="VM vCPU count (default: 2, or COSTCOMPARE_VM_VCPUS)")
    p.add_argument(
        "--vm-hourly-price",
        type=float,
        default=None,
        help="VM on-demand price per hour in USD (default: 0.0042)",
    )
    p.add_argument("--memory-mb", type=int, default=None, help="Function memory allocation in MB (default: 512)")
    p.add_argument(
        "--ephemeral-storage-mb",
        type=int,
        default=None,
        help="Function ephemeral storage allocation in MB (default: 512)",
    )
    p.add_argument("--quiet", action="store_true", help="Reduce log verbosity (INFO level only, no DEBUG)")


def cmd_compare(args: argparse.Namespace) -> int:
    cfg = load_config(
        duration_min_ms=args.min_duration_ms,
        duration_max_ms=args.max_duration_ms,
        vm_hourly_price=args.vm_hourly_price,
        vm_vcpu_count=args.vcpus,
        function_memory_mb=args.memory_mb,
        ephemeral_storage_mb=args.ephemeral_storage_mb,
        output_dir=args.output_dir,
        charts_enabled=False if args.no_charts else None,
        workers=args.workers,
    )
    logger = setup_logging(output_dir=None, verbose=not args.quiet)
    if cfg.charts_enabled:
        attach_run_logfile(logger, cfg.output_dir)

    try:
        result = run_comparison(cfg=cfg, logger=logger)
    except CostModelError as e:
        logger.error(str(e))
        return 2
    except Exception as e:
        error_type = type(e).__name__
        logger.error(f"Unexpected error ({error_type}): {e}")
        return 2

    print(format_summary(result.summary))
    return 0


def cmd_quote(args: argparse.Namespace) -> int:
    logger = setup_logging(output_dir=None, verbose=not args.quiet)
    try:
        cfg = load_config(
            vm_hourly_price=args.vm_hourly_price,
            vm_vcpu_count=args.vcpus,
            function_memory_mb=args.memory_mb,
            ephemeral_storage_mb=args.ephemeral_storage_mb,
            charts_enabled=False,
        )
        vm_pricing: VmPricing = cfg.vm_pricing
        fn_pricing: FunctionPricing = cfg.function_pricing
        b = function_cost_breakdown(args.requests, args.duration_ms, fn_pricing)
        vm_cost = vm_monthly_cost(vm_pricing)
    except CostModelError as e:
        logger.error(str(e))
        return 2

    lines = [
        f"Workload: {b.requests_per_month:,} requests/month at {b.avg_duration_ms:,}ms",
        f"Function service ({fn_pricing.memory_mb}MB memory, {fn_pricing.ephemeral_storage_mb}MB ephemeral storage):",
        f"  Compute:           ${b.compute_cost:,.2f} ({b.billable_gb_seconds:,.2f} billable GB-s)",
        f"  Requests:          ${b.request_cost:,.2f} ({b.billable_requests:,.0f} billable requests)",
        f"  Ephemeral storage: ${b.ephemeral_storage_cost:,.2f} ({b.billable_ephemeral_storage_gb:.3f} billable GB)",
        f"  Total:             ${b.total:,.2f}",
        f"Virtual machine ({vm_pricing.instance_type}, ${vm_pricing.hourly_price}/hour): ${vm_cost:,.2f}",
    ]
    print(os.linesep.join(lines))
    return 0


def cmd_savings(args: argparse.Namespace) -> int:
    try:
        pct = percentage_savings(args.expensive, args.cheap)
    except CostModelError as e:
        print(f"costcompare: {e}", file=sys.stderr)
        return 2
    print(f"{pct:.2f}%")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="costcompare", description="VM vs. function-service monthly cost comparison")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_cmp = sub.add_parser("compare", help="Sweep average job duration and compare monthly costs")
    _add_pricing_args(p_cmp)
    p_cmp.add_argument("--min-duration-ms", type=int, default=None, help="Shortest average job duration (default: 1)")
    p_cmp.add_argument(
        "--max-duration-ms", type=int, default=None, help="Longest average job duration (default: 900000)"
    )
    p_cmp.add_argument("--output-dir", default=None, help="Where charts and the run log go (default: ~/costcompare)")
    p_cmp.add_argument("--no-charts", action="store_true", help="Skip chart rendering")
    p_cmp.add_argument("--workers", type=int, default=None, help="Worker processes for pricing (default: 1)")
    p_cmp.set_defaults(func=cmd_compare)

    p_quote = sub.add_parser("quote", help="Itemized monthly cost for a single workload")
    _add_pricing_args(p_quote)
    p_quote.add_argument("--requests", type=int, required=True, help="Requests per month")
    p_quote.add_argument("--duration-ms", type=float, required=True, help="Average duration per request in ms")
    p_quote.set_defaults(func=cmd_quote)

    p_sav = sub.add_parser("savings", help="Percentage saved by the cheaper of two monthly costs")
    p_sav.add_argument("--expensive", type=float, required=True, help="The more expensive monthly cost")
    p_sav.add_argument("--cheap", type=float, required=True, help="The cheaper monthly cost")
    p_sav.set_defaults(func=cmd_savings)

    return p


def main(argv: list[str] | None = None) -> None:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    rc = args.func(args)
    raise SystemExit(rc)
