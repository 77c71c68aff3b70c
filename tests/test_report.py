from __future__ import annotations

import pytest

from costcompare.models import InvalidInput, Scenario, Service, UndefinedError
from costcompare.report import ComparisonReport, format_summary, percentage_savings
from costcompare.scenarios import DurationRange, generate_scenarios, price_scenarios


def _s(duration: int, cost: float, service: Service = Service.FUNCTION) -> Scenario:
    return Scenario(average_job_duration_ms=duration, jobs_per_month=1000 // duration, cost=cost, service=service)


@pytest.fixture(scope="module")
def swept_report() -> ComparisonReport:
    # Covers both the request-dominated short jobs and the flat tail.
    scenarios = generate_scenarios(DurationRange(1, 12_000), 2)
    vm = price_scenarios(scenarios, Service.VM)
    fn = price_scenarios(scenarios, Service.FUNCTION)
    return ComparisonReport(vm + fn)


def test_extrema_first_encountered_wins_ties():
    report = ComparisonReport([_s(1, 5.0), _s(2, 1.0), _s(3, 9.0), _s(4, 1.0), _s(5, 9.0)])
    ex = report.extrema_for(Service.FUNCTION)
    assert ex.cheapest.average_job_duration_ms == 2
    assert ex.most_expensive.average_job_duration_ms == 3


def test_count_tied_minimum():
    report = ComparisonReport([_s(1, 1.0), _s(2, 1.0), _s(3, 1.01), _s(4, 1.0)])
    assert report.count_tied_minimum(Service.FUNCTION) == 3


def test_cost_delta_can_be_negative():
    report = ComparisonReport([_s(1, 2.5), _s(1, 4.0, Service.VM)])
    assert report.cost_delta(Service.FUNCTION, Service.VM) == -1.5
    assert report.cost_delta(Service.VM, Service.FUNCTION) == 1.5


def test_percentage_savings():
    assert percentage_savings(36.53, 3.02) == pytest.approx(91.7, abs=0.05)
    assert percentage_savings(10.0, 10.0) == 0.0
    assert percentage_savings(10.0, 12.0) == -20.0


def test_percentage_savings_zero_denominator():
    with pytest.raises(UndefinedError):
        percentage_savings(0, 3.02)


def test_report_rejects_unpriced_scenarios():
    with pytest.raises(InvalidInput, match="not been priced"):
        ComparisonReport([Scenario(average_job_duration_ms=1, jobs_per_month=1)])


def test_report_missing_service():
    report = ComparisonReport([_s(1, 1.0)])
    with pytest.raises(InvalidInput, match="No priced scenarios"):
        report.extrema_for(Service.VM)


def test_swept_extrema(swept_report: ComparisonReport):
    vm = swept_report.extrema_for(Service.VM)
    assert vm.cheapest.cost == 3.02
    assert vm.cheapest.average_job_duration_ms == 1
    assert vm.most_expensive.average_job_duration_ms == 1
    assert swept_report.count_tied_minimum(Service.VM) == 12_000

    fn = swept_report.extrema_for(Service.FUNCTION)
    assert fn.most_expensive.average_job_duration_ms == 1
    assert fn.most_expensive.cost == pytest.approx(1073.13, abs=0.01)
    assert fn.cheapest.cost == pytest.approx(36.53, abs=0.01)
    # Request charges only vanish once the job volume nears the free tier (~5.2s jobs)
    assert fn.cheapest.average_job_duration_ms > 5000
    assert swept_report.count_tied_minimum(Service.FUNCTION) >= 1


def test_swept_cost_delta(swept_report: ComparisonReport):
    assert swept_report.cost_delta(Service.FUNCTION, Service.VM) == pytest.approx(33.51, abs=0.01)


def test_summarize_and_format(swept_report: ComparisonReport):
    summary = swept_report.summarize()
    assert summary.cheaper_service is Service.VM
    assert summary.cost_delta == pytest.approx(33.51, abs=0.01)
    assert summary.percentage_savings == pytest.approx(91.7, abs=0.05)
    assert [ss.service for ss in summary.services] == [Service.VM, Service.FUNCTION]
    assert summary.services[0].scenario_count == 12_000

    text = format_summary(summary)
    assert "Virtual machine (12,000 scenarios):" in text
    assert "Function service" in text
    assert "$3.02" in text
    assert "Cost delta (function min - VM min): $33.51" in text
