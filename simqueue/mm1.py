# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on September 28, 2019
# Last Update: Time-stamp: <2019-10-04 08:33:05 liux>
###############################################################

"""A single-server queue with Markovian arrival and service processes."""

import math

from collections import deque

from .utils import TimeMarks, DataSeries, TimeSeries
from .variate import ExponentialVariate

__all__ = ["Customer", "MM1Queue"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

class Customer(object):
    """A customer going through the queue.

    A customer is created upon arrival, at which time the arrival time
    and the number of customers waiting in queue (not including the
    one in service) are recorded. The service begin and end times are
    filled in as the customer is being served.

    """

    __slots__ = ('arrival_time', 'queue_on_arrival', 'service_begin', 'service_end')

    def __init__(self, arrival_time, queue_on_arrival):
        self.arrival_time = arrival_time
        self.queue_on_arrival = queue_on_arrival
        self.service_begin = None
        self.service_end = None

    def __repr__(self):
        return "Customer(arrival_time=%r, queue_on_arrival=%r, service_begin=%r, service_end=%r)" % \
            (self.arrival_time, self.queue_on_arrival, self.service_begin, self.service_end)

    def wait_time(self):
        """Time spent in queue before service, or None if not in service yet."""
        if self.service_begin is None: return None
        return self.service_begin-self.arrival_time

    def service_time(self):
        if self.service_end is None: return None
        return self.service_end-self.service_begin

    def system_time(self):
        if self.service_end is None: return None
        return self.service_end-self.arrival_time

class MM1Queue(object):
    """An M/M/1 queue driven by direct event scheduling.

    The queue runs two chains of events on the simulator. The arrival
    chain creates a customer and schedules the next arrival, forever.
    The service chain serves the customer at the head of the system
    and, at completion, moves the customer to the served list and
    starts serving the next one, if any, at the same instant.

    Customers currently in system (waiting or in service) are kept in
    arrival order; the one at the head is the one in service.
    Customers are appended to the served list in the order they
    complete their service. The served list is meant to be drained by
    whoever collects statistics using num_served() and pop_served();
    otherwise it grows without bound.

    """

    def __init__(self, sim, arrival_rate, service_rate, rv=None, collect=None):
        """Create the queue on the given simulator.

        Args:
            sim (simulator): the simulator on which events are scheduled

            arrival_rate (float): the mean arrival rate; must be positive

            service_rate (float): the mean service rate; must be positive

            rv (ExponentialVariate): the source of random delays; if
                ignored, one is created and seeded from the
                simulator's random sequence

            collect (DataCollector): the optional collector for statistics

        The DataCollector, if provided, accepts the following values:
            * **arrivals**: timemarks (time of customer arrivals)
            * **services**: timemarks (time of customers entering service)
            * **departs**: timemarks (time of customers departing from system)
            * **inter_arrivals**: dataseries (customer inter-arrival time)
            * **queue_times**: dataseries (time of customers in queue before service)
            * **service_times**: dataseries (time of customers in service)
            * **system_times**: dataseries (time of customers in system)
            * **in_systems**: timeseries (number of customers in system)
            * **in_queues**: timeseries (number of customers in queue)

        """

        for k, v in (('arrival_rate', arrival_rate), ('service_rate', service_rate)):
            if not v > 0:
                errmsg = "MM1Queue(%s=%r) non-positive rate" % (k, v)
                log.error(errmsg)
                raise ValueError(errmsg)
            if not math.isfinite(v):
                errmsg = "MM1Queue(%s=%r) non-finite rate" % (k, v)
                log.error(errmsg)
                raise ValueError(errmsg)

        self.sim = sim
        self.arrival_rate = arrival_rate
        self.service_rate = service_rate
        self.rv = rv if rv is not None else \
                  ExponentialVariate(sim.rng().randrange(2**32))
        self.stats = collect
        if collect is not None:
            self._check_collector(collect)

        self.system = deque()
        self.served = deque()
        self._arrivals = 0
        self._last_arrival = sim.now
        self._started = False

    @staticmethod
    def _check_collector(dc):
        for k, v in dc._attrs.items():
            if k in ('in_systems', 'in_queues'):
                if not isinstance(v, TimeSeries):
                    raise TypeError("MM1Queue DataCollector: '%s' not timeseries" % k)
            elif k in ('arrivals', 'services', 'departs'):
                if not isinstance(v, TimeMarks):
                    raise TypeError("MM1Queue DataCollector: '%s' not timemarks" % k)
            elif k in ('inter_arrivals', 'queue_times', 'service_times', 'system_times'):
                if type(v) is not DataSeries:
                    raise TypeError("MM1Queue DataCollector: '%s' not dataseries" % k)
            else:
                raise ValueError("MM1Queue DataCollector: '%s' unrecognized" % k)

    def start(self):
        """Schedule the first arrival; the arrival process then runs
        indefinitely. This method can be called only once."""

        if self._started:
            errmsg = "MM1Queue.start() called more than once"
            log.error(errmsg)
            raise RuntimeError(errmsg)
        self._started = True
        self._sched_arrival()

    def queue_length(self):
        """Return the number of customers currently waiting for service (not
        including the one, if any, currently being served)."""
        return len(self.system)-1 if self.system else 0

    def num_in_system(self):
        return len(self.system)

    def num_in_queue(self):
        return self.queue_length()

    def num_arrivals(self):
        """Return the total number of customers that have arrived."""
        return self._arrivals

    def num_served(self):
        """Return the number of served customers not yet drained."""
        return len(self.served)

    def pop_served(self):
        """Remove and return the earliest served customer not yet drained."""
        if not self.served:
            errmsg = "MM1Queue.pop_served() from empty served list"
            log.error(errmsg)
            raise IndexError(errmsg)
        return self.served.popleft()

    def _sched_arrival(self):
        self.sim.sched(self._arrive, offset=self.rv.exponential(self.arrival_rate),
                       name='arrive')

    def _arrive(self):
        """Event handler for customer arrival."""

        c = Customer(self.sim.now, self.queue_length())
        self.system.append(c)
        self._arrivals += 1
        log.debug("%g: customer %d arrives (num_in_system=%d)" %
                  (self.sim.now, self._arrivals, len(self.system)))
        if self.stats is not None:
            self.stats._sample("arrivals", self.sim.now)
            self.stats._sample("inter_arrivals", self.sim.now-self._last_arrival)
            self.stats._sample("in_systems", (self.sim.now, len(self.system)))
            self.stats._sample("in_queues", (self.sim.now, self.queue_length()))
        self._last_arrival = self.sim.now

        # the arrived customer is the only one in system
        if len(self.system) == 1:
            self._serve()

        # schedule next customer's arrival
        self._sched_arrival()

    def _serve(self):
        """Start serving the customer at the head of the system."""

        if not self.system:
            errmsg = "MM1Queue._serve() at time %g with empty system" % self.sim.now
            log.error(errmsg)
            raise RuntimeError(errmsg)

        c = self.system[0]
        assert c.service_begin is None
        c.service_begin = self.sim.now
        log.debug("%g: customer arrived at %g enters service" % (self.sim.now, c.arrival_time))
        if self.stats is not None:
            self.stats._sample("services", self.sim.now)
            self.stats._sample("queue_times", c.wait_time())
            self.stats._sample("in_queues", (self.sim.now, self.queue_length()))
        self.sim.sched(self._depart, offset=self.rv.exponential(self.service_rate),
                       name='depart')

    def _depart(self):
        """Event handler for service completion."""

        if not self.system or self.system[0].service_begin is None:
            errmsg = "MM1Queue._depart() at time %g with no customer in service" % self.sim.now
            log.error(errmsg)
            raise RuntimeError(errmsg)

        c = self.system.popleft()
        c.service_end = self.sim.now
        self.served.append(c)
        log.debug("%g: customer arrived at %g departs (num_in_system=%d)" %
                  (self.sim.now, c.arrival_time, len(self.system)))
        if self.stats is not None:
            self.stats._sample("departs", self.sim.now)
            self.stats._sample("service_times", c.service_time())
            self.stats._sample("system_times", c.system_time())
            self.stats._sample("in_systems", (self.sim.now, len(self.system)))

        # there are remaining customers in system
        if self.system:
            self._serve()
