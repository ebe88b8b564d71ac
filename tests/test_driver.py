import numpy as np
import pytest

import simqueue
from simqueue import (simulator, MM1Queue, MM1Observer, STEP, Customer,
                      expected_mm1, check_mm1_config, run_mm1, mm1_queue_demo)

def test_expected_values():
    mq, mw = expected_mm1(1.0, 2.0)
    assert mw == pytest.approx(0.5)
    assert mq == pytest.approx(0.5)
    mq, mw = expected_mm1(0.9, 1.0)
    assert mw == pytest.approx(9.0)
    assert mq == pytest.approx(8.1)
    with pytest.raises(ValueError):
        expected_mm1(2.0, 2.0)

def test_end_to_end():
    mean_queue, expected_mean_queue, mean_wait, expected_mean_wait = \
        mm1_queue_demo(1.0, 2.0, 10000, seed=13579)
    assert expected_mean_queue == pytest.approx(0.5)
    assert expected_mean_wait == pytest.approx(0.5)
    assert mean_queue == pytest.approx(0.5, rel=0.2)
    assert mean_wait == pytest.approx(0.5, rel=0.2)

def test_reproducible():
    a = mm1_queue_demo(0.5, 1.0, 3000, seed=42)
    b = mm1_queue_demo(0.5, 1.0, 3000, seed=42)
    assert a == b
    ra = run_mm1(0.5, 1.0, 3000, name='same')
    rb = run_mm1(0.5, 1.0, 3000, name='same')
    assert ra.astuple() == rb.astuple()
    assert ra.end_time == rb.end_time

@pytest.mark.parametrize("num_pax", [1, 2, 17, 1000])
def test_exact_sample_count(num_pax):
    sim = simulator(seed=num_pax)
    q = MM1Queue(sim, 0.7, 1.0)
    obs = MM1Observer(q, num_pax)
    q.start()
    assert sim.run(obs)
    assert obs.num_served == num_pax
    assert q.num_served() == 0
    # the queue has been served no further than the halt
    assert q.num_arrivals() == num_pax+q.num_in_system()

def test_single_customer():
    r = run_mm1(1.0, 2.0, 1, seed=7)
    assert r.count == 1
    # the first customer finds the server idle
    assert r.mean_wait == 0
    assert r.mean_queue == 0

def test_observer_detects_double_departure():
    class FakeQueue(object):
        def __init__(self):
            self.served = [Customer(0, 0), Customer(0, 0)]
        def num_served(self):
            return len(self.served)
        def pop_served(self):
            return self.served.pop(0)
    obs = MM1Observer(FakeQueue(), 10)
    with pytest.raises(RuntimeError):
        obs()

def test_observer_accumulates():
    class OneQueue(object):
        def __init__(self, customers):
            self.customers = customers
        def num_served(self):
            return 1 if self.customers else 0
        def pop_served(self):
            return self.customers.pop(0)
    cs = []
    for a, n, b, e in ((0.0, 0, 0.0, 1.0), (0.5, 0, 1.0, 2.0), (0.8, 1, 2.0, 2.5)):
        c = Customer(a, n)
        c.service_begin, c.service_end = b, e
        cs.append(c)
    obs = MM1Observer(OneQueue(cs), 3)
    assert obs() == STEP.CONTINUE
    assert obs() == STEP.CONTINUE
    assert obs() == STEP.HALT
    assert obs.mean_queue() == pytest.approx(1/3)
    assert obs.mean_wait() == pytest.approx((0+0.5+1.2)/3)

def test_no_samples_no_means():
    obs = MM1Observer(None, 5)
    with pytest.raises(RuntimeError):
        obs.mean_wait()
    with pytest.raises(RuntimeError):
        obs.mean_queue()

@pytest.mark.parametrize("config,exc", [
    ((2.0, 1.0, 10), ValueError),
    ((1.0, 1.0, 10), ValueError),
    ((0, 1.0, 10), ValueError),
    ((1.0, -2.0, 10), ValueError),
    ((1.0, 2.0, 0), ValueError),
    ((1.0, 2.0, 2.5), TypeError),
    ((1.0, 2.0, True), TypeError),
    ((1.0, float('inf'), 10), ValueError),
    ((float('inf'), float('inf'), 10), ValueError),
    ((1.0, 2.0, np.int64(0)), ValueError),
])
def test_bad_config(config, exc):
    with pytest.raises(exc):
        check_mm1_config(*config)

def test_bad_config_rejected_before_scheduling(monkeypatch):
    def no_simulator(*args, **kwargs):
        raise AssertionError("simulator should not be created")
    monkeypatch.setattr(simqueue.driver, "simulator", no_simulator)
    with pytest.raises(ValueError):
        run_mm1(2.0, 1.0, 100)

def test_report(capsys):
    r = run_mm1(1.0, 2.0, 500, seed=1)
    r.report()
    out = capsys.readouterr().out
    assert "served customers: 500" in out
    assert "expected 0.5" in out

def test_numpy_sample_count():
    check_mm1_config(1.0, 2.0, np.int64(10))
    r = run_mm1(1.0, 2.0, np.int64(25), seed=3)
    assert r.count == 25

def test_infinite_service_rate_rejected():
    with pytest.raises(ValueError):
        run_mm1(1.0, float('inf'), 5, seed=1)
    with pytest.raises(ValueError):
        expected_mm1(1.0, float('inf'))
