import pytest

import simqueue
from simqueue import simulator, STEP

def test_events_in_timestamp_order():
    sim = simulator('order')
    fired = []
    for t in (5, 1, 3, 2, 4):
        sim.sched(lambda t=t: fired.append((sim.now, t)), until=t)
    sim.run()
    assert fired == [(1, 1), (2, 2), (3, 3), (4, 4), (5, 5)]
    assert sim.now == 5

def test_same_time_events_fifo():
    sim = simulator('ties')
    fired = []
    for i in range(20):
        sim.sched(fired.append, i, offset=1.0)
    sim.run()
    assert fired == list(range(20))

def test_sched_passes_arguments():
    sim = simulator('args')
    got = []
    def handler(a, b, c=None):
        got.append((a, b, c))
    sim.sched(handler, 1, 2, c=3, offset=0.5)
    sim.run()
    assert got == [(1, 2, 3)]

def test_rescheduling_chain_is_not_recursive():
    sim = simulator('chain')
    count = [0]
    def tick():
        count[0] += 1
        sim.sched(tick, offset=1.0)
    sim.sched(tick)
    # deep enough to blow the stack if handlers were nested
    sim.run(until=5000)
    assert count[0] == 5000
    assert sim.now == 5000

def test_observer_halt_leaves_pending_events():
    sim = simulator('halt')
    fired = []
    for t in range(1, 11):
        sim.sched(fired.append, t, until=t)
    def observer():
        return STEP.HALT if len(fired) == 3 else STEP.CONTINUE
    assert sim.run(observer) is True
    assert fired == [1, 2, 3]
    assert sim.now == 3
    assert sim.peek() == 4
    # the run can be resumed
    assert sim.run() is False
    assert fired == list(range(1, 11))

def test_observer_called_after_each_event():
    sim = simulator('observe')
    seen = []
    for t in (1, 2, 2, 3):
        sim.sched(lambda: None, until=t)
    sim.run(lambda: seen.append(sim.now))
    assert seen == [1, 2, 2, 3]

def test_run_until_advances_clock():
    sim = simulator('horizon')
    fired = []
    sim.sched(fired.append, 'a', until=2)
    sim.sched(fired.append, 'b', until=8)
    sim.run(until=5)
    assert fired == ['a']
    assert sim.now == 5
    sim.run(offset=5)
    assert fired == ['a', 'b']
    assert sim.now == 10

def test_step_and_peek():
    sim = simulator('step')
    assert sim.peek() == simqueue.infinite_time
    sim.step() # nothing happens
    sim.sched(lambda: None, offset=2.5)
    assert sim.peek() == 2.5
    sim.step()
    assert sim.now == 2.5
    assert sim.peek() == simqueue.infinite_time

def test_bad_schedule_times():
    sim = simulator('bad', init_time=10)
    with pytest.raises(ValueError):
        sim.sched(lambda: None, offset=-1)
    with pytest.raises(ValueError):
        sim.sched(lambda: None, until=5)
    with pytest.raises(ValueError):
        sim.sched(lambda: None, offset=1, until=12)
    with pytest.raises(ValueError):
        sim.run(until=9)

def test_bad_seed():
    with pytest.raises(ValueError):
        simulator(seed=-1)
    with pytest.raises(ValueError):
        simulator(seed=2**32)

def test_rng_reproducible():
    a = [simulator('same').rng().random() for _ in range(2)]
    assert a[0] == a[1]
    b = [simulator(seed=7).rng().random() for _ in range(2)]
    assert b[0] == b[1]
    assert simulator('one').rng().random() != simulator('two').rng().random()

def test_show_calendar(capsys):
    sim = simulator('calendar')
    sim.sched(lambda: None, offset=2, name='second')
    sim.sched(lambda: None, offset=1, name='first')
    sim.show_calendar()
    out = capsys.readouterr().out
    assert "num=2" in out
    assert out.index('first') < out.index('second')
