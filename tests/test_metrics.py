from decimal import Decimal

import pytest

from sjf_sim.metrics import format_average, round_half_up
from sjf_sim.scheduler import simulate


def test_averages_scenario_a():
    res = simulate([1, 2, 3], [0, 1, 2], [2, 4, 1])
    assert res.avg_waiting == pytest.approx(2 / 3)
    assert res.avg_turnaround == pytest.approx((2 + 6 + 1) / 3)
    assert res.avg_completion == pytest.approx((2 + 7 + 3) / 3)
    assert res.summary.legacy_avg_completion == pytest.approx(6 / 3)


def test_system_metrics_with_idle():
    res = simulate([1], [3], [2])
    assert res.final_clock == 5
    assert res.system.makespan == 5
    assert res.system.cpu_busy_time == 2
    assert res.system.idle_time == 3
    assert res.system.cpu_utilization == pytest.approx(0.4)
    assert res.system.throughput == pytest.approx(0.2)


@pytest.mark.parametrize(
    "value,expected",
    [
        (2.345, Decimal("2.35")),
        (2.675, Decimal("2.68")),
        (-2.345, Decimal("-2.35")),
        (0.125, Decimal("0.13")),
        (1 / 3, Decimal("0.33")),
        (3, Decimal("3.00")),
    ],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_format_average():
    assert format_average(2 / 3) == "0.67"
    assert format_average(2.5, digits=0) == "3"
    assert format_average(4) == "4.00"


@pytest.mark.parametrize("digits", [-1, 11, 40])
def test_round_half_up_rejects_bad_digits(digits):
    with pytest.raises(ValueError):
        round_half_up(1.5, digits)
