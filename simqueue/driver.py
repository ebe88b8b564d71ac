# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on September 29, 2019
# Last Update: Time-stamp: <2019-10-04 09:56:41 liux>
###############################################################

"""Run the M/M/1 queue for a fixed number of served customers and
compare the measured averages with the standard formulas."""

import math, numbers

from .utils import STEP, DataSeries
from .simulator import simulator
from .mm1 import MM1Queue

__all__ = ["MM1Observer", "MM1Result", "expected_mm1", "check_mm1_config",
           "run_mm1", "mm1_queue_demo"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

def check_mm1_config(arrival_rate, service_rate, num_pax):
    """Reject a configuration that can't produce a report: both rates
    must be positive and finite, the queue must be stable (arrival rate less than
    service rate), and the number of customers a positive integer."""

    if not arrival_rate > 0:
        errmsg = "mm1(arrival_rate=%r) non-positive rate" % arrival_rate
        log.error(errmsg)
        raise ValueError(errmsg)
    if not service_rate > 0:
        errmsg = "mm1(service_rate=%r) non-positive rate" % service_rate
        log.error(errmsg)
        raise ValueError(errmsg)
    for k, v in (('arrival_rate', arrival_rate), ('service_rate', service_rate)):
        if not math.isfinite(v):
            errmsg = "mm1(%s=%r) non-finite rate" % (k, v)
            log.error(errmsg)
            raise ValueError(errmsg)
    if arrival_rate >= service_rate:
        errmsg = "mm1(arrival_rate=%r, service_rate=%r) unstable queue" % \
                 (arrival_rate, service_rate)
        log.error(errmsg)
        raise ValueError(errmsg)
    if isinstance(num_pax, bool) or not isinstance(num_pax, numbers.Integral):
        errmsg = "mm1(num_pax=%r) non-integer sample count" % (num_pax,)
        log.error(errmsg)
        raise TypeError(errmsg)
    if num_pax <= 0:
        errmsg = "mm1(num_pax=%r) non-positive sample count" % num_pax
        log.error(errmsg)
        raise ValueError(errmsg)

def expected_mm1(arrival_rate, service_rate):
    """Return the expected mean queue length and the expected mean wait
    (time in queue) of a stable M/M/1 queue."""

    if not 0 < arrival_rate < service_rate or not math.isfinite(service_rate):
        errmsg = "expected_mm1(arrival_rate=%r, service_rate=%r) unstable queue" % \
                 (arrival_rate, service_rate)
        log.error(errmsg)
        raise ValueError(errmsg)
    rho = arrival_rate/service_rate
    expected_mean_wait = rho/(service_rate-arrival_rate)
    expected_mean_queue = arrival_rate*expected_mean_wait
    return expected_mean_queue, expected_mean_wait

class MM1Observer(object):
    """Collect statistics from the served customers of an M/M/1 queue.

    An observer is called by the simulator after each processed event.
    It drains the served customer (there can be at most one since the
    last call), accumulates the queue length seen on arrival and the
    wait time, and asks the simulator to halt once the given number of
    customers has been counted.

    """

    def __init__(self, queue, num_pax):
        self.queue = queue
        self.num_pax = num_pax
        self.num_served = 0
        self.total_queue = 0.0
        self.total_wait = 0.0
        self.waits = DataSeries()

    def __call__(self):
        n = self.queue.num_served()
        if n > 0:
            if n > 1:
                errmsg = "MM1Observer() found %d customers served since last event" % n
                log.error(errmsg)
                raise RuntimeError(errmsg)
            c = self.queue.pop_served()
            assert c.arrival_time <= c.service_begin <= c.service_end
            self.total_queue += c.queue_on_arrival
            self.total_wait += c.service_begin-c.arrival_time
            self.waits._push(c.service_begin-c.arrival_time)
            self.num_served += 1
        if self.num_served >= self.num_pax:
            return STEP.HALT
        return STEP.CONTINUE

    def mean_queue(self):
        if self.num_served == 0:
            errmsg = "MM1Observer.mean_queue() without served customers"
            log.error(errmsg)
            raise RuntimeError(errmsg)
        return self.total_queue/self.num_served

    def mean_wait(self):
        if self.num_served == 0:
            errmsg = "MM1Observer.mean_wait() without served customers"
            log.error(errmsg)
            raise RuntimeError(errmsg)
        return self.total_wait/self.num_served

class MM1Result(object):
    """Measured and expected averages from one simulation run."""

    def __init__(self, arrival_rate, service_rate, observer, end_time):
        self.arrival_rate = arrival_rate
        self.service_rate = service_rate
        self.rho = arrival_rate/service_rate
        self.count = observer.num_served
        self.end_time = end_time
        self.mean_queue = observer.mean_queue()
        self.mean_wait = observer.mean_wait()
        self.expected_mean_queue, self.expected_mean_wait = \
            expected_mm1(arrival_rate, service_rate)
        self.waits = observer.waits

    def astuple(self):
        """Return (mean_queue, expected_mean_queue, mean_wait, expected_mean_wait)."""
        return self.mean_queue, self.expected_mean_queue, \
            self.mean_wait, self.expected_mean_wait

    def report(self, prefix=''):
        print('%sM/M/1 queue: arrival_rate=%g, service_rate=%g, rho=%g' %
              (prefix, self.arrival_rate, self.service_rate, self.rho))
        print('%sserved customers: %d (simulation time %g)' % (prefix, self.count, self.end_time))
        print('%smean queue length: %g (expected %g)' %
              (prefix, self.mean_queue, self.expected_mean_queue))
        print('%smean wait time: %g (expected %g)' %
              (prefix, self.mean_wait, self.expected_mean_wait))
        if len(self.waits) > 1:
            print('%swait time: stdev=%g, min=%g, max=%g' %
                  (prefix, self.waits.stdev(), self.waits.min(), self.waits.max()))

def run_mm1(arrival_rate, service_rate, num_pax, seed=None, name=None, collect=None):
    """Run the M/M/1 queue until a fixed number of customers have been
    served and return the result (an MM1Result instance).

    Args:
        arrival_rate (float): mean arrival rate

        service_rate (float): mean service rate; must be greater than
            the arrival rate

        num_pax (int): number of served customers to collect

        seed (int): optional seed of the simulator; a run with the
            same seed (or the same simulator name) is reproducible

        name (string): optional name of the simulator

        collect (DataCollector): optional collector passed on to the
            queue

    """

    check_mm1_config(arrival_rate, service_rate, num_pax)

    sim = simulator(name, seed=seed)
    q = MM1Queue(sim, arrival_rate, service_rate, collect=collect)
    obs = MM1Observer(q, num_pax)
    q.start()
    sim.run(obs)
    log.info("served %d customers by time %g" % (obs.num_served, sim.now))
    return MM1Result(arrival_rate, service_rate, obs, sim.now)

def mm1_queue_demo(arrival_rate, service_rate, num_pax, seed=None):
    """Run until a fixed number of customers has been served; return the
    tuple (mean_queue, expected_mean_queue, mean_wait, expected_mean_wait)."""
    return run_mm1(arrival_rate, service_rate, num_pax, seed=seed).astuple()
