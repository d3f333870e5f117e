import pytest

from fargate_calc.model.requirement import ResourceRequirement
from fargate_calc.sim.matcher import fargate_hourly_price, match_tier
from fargate_calc.sim.result import UNMATCHED, Matched, Unmatched
from fargate_calc.sim.tiers import tiers

CPU_RATE = 0.04656
MEM_RATE = 0.00511


def _match(cpu_m, mem_mi):
    return match_tier(ResourceRequirement(cpu_m, mem_mi), tiers(), CPU_RATE, MEM_RATE)


def test_empty_requirement_gets_smallest_tier():
    res = _match(0, 0)
    assert isinstance(res, Matched)
    assert (res.cpu_m, res.mem_mi) == (250, 512)
    assert res.hourly_price == pytest.approx(0.25 * CPU_RATE + 0.5 * MEM_RATE)


def test_cpu_above_catalog_is_unmatched():
    assert _match(20000, 1000) is UNMATCHED


def test_memory_above_catalog_is_unmatched():
    assert isinstance(_match(16000, 122881), Unmatched)


def test_largest_tier_still_matches():
    res = _match(16000, 122880)
    assert (res.cpu_m, res.mem_mi) == (16000, 122880)


def test_picks_smallest_cpu_then_first_memory():
    res = _match(600, 762)
    assert (res.cpu_m, res.mem_mi) == (1000, 2048)
    assert res.hourly_price == pytest.approx(0.05678)


def test_zero_cpu_is_matched_by_memory_alone():
    res = _match(0, 5000)
    assert (res.cpu_m, res.mem_mi) == (1000, 5120)


def test_first_fit_stops_at_smallest_cpu_tier():
    # 250m/2048Mi влезает в первый тир, более крупные не рассматриваются
    res = _match(100, 2000)
    assert (res.cpu_m, res.mem_mi) == (250, 2048)


def test_memory_too_big_for_cpu_tier_moves_up():
    res = _match(250, 3000)
    assert (res.cpu_m, res.mem_mi) == (500, 3072)


@pytest.mark.parametrize("cpu_m", [0, 1, 250, 251, 999, 1000, 4001, 12000, 16000])
@pytest.mark.parametrize("mem_mi", [0, 1, 512, 513, 4097, 30721, 65536, 122880])
def test_catalog_covers_everything_up_to_its_maximum(cpu_m, mem_mi):
    res = _match(cpu_m, mem_mi)
    assert isinstance(res, Matched)
    assert res.mem_mi >= mem_mi
    if cpu_m:
        assert res.cpu_m >= cpu_m


def test_price_formula_units():
    # 1 vCPU-час + 1 GiB-час
    assert fargate_hourly_price(1000, 1024, 2.0, 3.0) == pytest.approx(5.0)
