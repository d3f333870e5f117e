import json

import pytest

from fargate_calc.config import parse_instance_prices
from fargate_calc.sim.costs import (
    accumulate_node, accumulate_pod, load_prices, node_ec2_price, node_fargate_equivalent,
)
from fargate_calc.sim.result import UNMATCHED, Matched, NodeCostTotals, PodCostTotals

PRICES = {"c5.xlarge": 0.194}


def test_pod_totals_add_matched_only():
    totals = PodCostTotals()
    totals = accumulate_pod(totals, Matched(1000, 2048, 0.05678))
    totals = accumulate_pod(totals, UNMATCHED)
    totals = accumulate_pod(totals, Matched(250, 512, 0.014195))
    assert totals.total_cpu_m == 1250
    assert totals.total_mem_mi == 2560
    assert totals.total_hourly_price == pytest.approx(0.070975)


def test_accumulate_pod_does_not_mutate():
    start = PodCostTotals()
    accumulate_pod(start, Matched(1000, 2048, 1.0))
    assert start == PodCostTotals()


def test_known_instance_type_price(make_node):
    assert node_ec2_price(make_node("n1", "c5.xlarge"), PRICES) == 0.194


def test_unknown_instance_type_is_skipped(make_node, caplog):
    assert node_ec2_price(make_node("n1", "m7.mystery"), PRICES) is None
    assert "EC2 price for m7.mystery not provided." in caplog.text


def test_unlabeled_node_is_skipped(make_node, caplog):
    assert node_ec2_price(make_node("n1"), PRICES) is None
    assert "Cannot determine instance type for node n1" in caplog.text


def test_fargate_equivalent_is_linear(make_node):
    node = make_node("n1", cpu_m=4000, mem_mi=8192)
    assert node_fargate_equivalent(node, 0.04656, 0.00511) == pytest.approx(4 * 0.04656 + 8 * 0.00511)


def test_node_totals():
    totals = accumulate_node(NodeCostTotals(), 0.194, 0.22712)
    totals = accumulate_node(totals, None, 0.1)
    assert totals.ec2_hourly_price == pytest.approx(0.194)
    assert totals.fargate_equivalent_hourly_price == pytest.approx(0.32712)


def test_load_prices(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({"region": "eu-central-1", "prices": {"m5.large": "0.115"}}))
    state = load_prices(path)
    assert state.region == "eu-central-1"
    assert state.hourly_prices == {"m5.large": 0.115}


def test_load_prices_hourly_prices_key(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({"hourly_prices": {"c5.xlarge": 0.194}}))
    assert load_prices(path).hourly_prices == PRICES


def test_parse_instance_prices():
    assert parse_instance_prices("c5.xlarge=0.194, m5.large=0.096,") == {
        "c5.xlarge": 0.194,
        "m5.large": 0.096,
    }
    with pytest.raises(ValueError):
        parse_instance_prices("c5.xlarge")
    with pytest.raises(ValueError):
        parse_instance_prices("c5.xlarge=cheap")
