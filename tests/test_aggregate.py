from fargate_calc.model.requirement import ResourceRequirement
from fargate_calc.sim.aggregate import POD_MEMORY_OVERHEAD_MI, aggregate_pod
from fargate_calc.sim.selector import (
    is_daemonset_pod, is_istio_proxy, is_terminal_pod, pick_quantity, skip_reason,
)


def test_requests_are_summed_with_pod_overhead(make_pod, make_container):
    pod = make_pod("web", [
        make_container("a", req_cpu=300, req_mem=256),
        make_container("b", req_cpu=300, req_mem=256),
    ])
    assert aggregate_pod(pod) == ResourceRequirement(600, 762)


def test_limits_win_over_requests(make_pod, make_container):
    pod = make_pod("web", [make_container(req_cpu=100, req_mem=128, limit_cpu=200, limit_mem=512)])
    assert aggregate_pod(pod) == ResourceRequirement(200, 512 + POD_MEMORY_OVERHEAD_MI)


def test_use_requests_only_ignores_limits(make_pod, make_container):
    pod = make_pod("web", [make_container(req_cpu=100, req_mem=128, limit_cpu=200, limit_mem=512)])
    assert aggregate_pod(pod, use_requests_only=True) == ResourceRequirement(100, 378)


def test_cpu_and_memory_choose_independently(make_pod, make_container):
    pod = make_pod("web", [make_container(req_cpu=100, req_mem=128, limit_mem=1024)])
    assert aggregate_pod(pod) == ResourceRequirement(100, 1274)


def test_istio_proxy_excluded_by_flag(make_pod, make_container):
    pod = make_pod("web", [
        make_container("app", req_cpu=500, req_mem=500),
        make_container("istio-proxy", req_cpu=100, req_mem=128),
    ])
    assert aggregate_pod(pod, exclude_istio_proxy=True) == ResourceRequirement(500, 750)
    assert aggregate_pod(pod, exclude_istio_proxy=False) == ResourceRequirement(600, 878)


def test_pod_without_resources_only_has_overhead(make_pod, make_container):
    pod = make_pod("bare", [make_container("a"), make_container("b")])
    assert aggregate_pod(pod) == ResourceRequirement(0, 250)


def test_pick_quantity():
    assert pick_quantity(100, 200, False) == 200
    assert pick_quantity(100, 200, True) == 100
    assert pick_quantity(100, 0, False) == 100
    assert pick_quantity(None, None, False) == 0
    assert pick_quantity(None, 300, True) == 0


def test_pod_predicates(make_pod, make_container):
    ds = make_pod("fluentbit", [], owner_kinds=["DaemonSet"])
    done = make_pod("job", [], phase="Succeeded", owner_kinds=["Job"])
    failed = make_pod("job2", [], phase="Failed")
    web = make_pod("web", [], owner_kinds=["ReplicaSet"])

    assert is_daemonset_pod(ds) and not is_daemonset_pod(web)
    assert is_terminal_pod(done) and is_terminal_pod(failed) and not is_terminal_pod(web)
    assert is_istio_proxy(make_container("istio-proxy"))
    assert not is_istio_proxy(make_container("istio-init"))

    assert skip_reason(ds, exclude_daemonsets=True) == "DaemonSet"
    assert skip_reason(ds, exclude_daemonsets=False) is None
    assert skip_reason(done) == "phase Succeeded"
    assert skip_reason(web) is None
