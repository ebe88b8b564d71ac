# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on June 14, 2019
# Last Update: Time-stamp: <2019-10-03 09:47:30 liux>
###############################################################

import random, uuid, time

from .utils import STEP
from .event import *

__all__ = ["simulator", "infinite_time", "minus_infinite_time"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# simulator names are mapped to random seeds within this namespace
_namespace = uuid.UUID('5b1e2ea4-6c1a-4fd3-9d54-3bcf4a1f2a7e')

class simulator:
    """A simulator instance.

    Each simulator instance has an independent timeline (i.e., event
    list) on which events are scheduled and executed in timestamp
    order. Events with the same timestamp are executed in the order
    they have been scheduled.

    Each simulator can have an optional name, or it can remain
    anonymous. Each simulator maintains an event list, a simulation
    clock, and a pseudo-random number generator.

    """

    def __init__(self, name=None, init_time=0, seed=None):
        """Create a simulator.

        Args:
            name (string): a name of the simulator; if ignored, the
                system will generate a unique name for the simulator;
                unless a seed is given, the name is also used to
                determine the seed of the pseudo-random generator
                attached to the simulator

            init_time (float): the optional start time of the
                simulator; if unspecified, the default is zero

            seed (int): the optional seed of the pseudo-random
                generator attached to the simulator

        """

        if seed is not None and (seed < 0 or seed >= 2**32):
            errmsg = "simulator(seed=%r) must be a 32-bit integer" % seed
            log.error(errmsg)
            raise ValueError(errmsg)

        self.name = name if name is not None else str(uuid.uuid4())
        self.seed = seed
        log.info("creating simulator '%s'" % self.name)

        self.init_time = self.now = init_time
        self._eventlist = _EventList_()
        self._rng = None

        # performance statistics
        self._runtime = {
            "start_clock": time.time(),
            "scheduled_events": 0,
            "executed_events": 0,
            "halts": 0,
        }

    def sched(self, func, *args, offset=None, until=None, name=None, **kwargs):
        """Schedule an event.

        An event is represented as a function invoked in the simulated
        future.

        Args:
            func (function): the event handler, which is a
                user-defined function

            args (list): the positional arguments to be passed to the
                event handler once it's invoked at the scheduled time

            offset (float): relative time from now at which the event
                is scheduled to happen; if provided, must be a
                non-negative value

            until (float): the absolute time at which the event is
                scheduled to happen; if provided, it must not be
                earlier than the current time; note that either
                'offset' or 'until' can be used, but not both; if both
                are ignored, it's assumed to be the current time

            name (string): an optional name for the event

            kwargs (dict): the keyworded arguments to be passed to the
                event handler once it's invoked at the scheduled time

        Returns:
            This method returns the scheduled event (an opaque object
            to the user).

        """

        time = self._event_time("sched", offset, until)
        self._runtime["scheduled_events"] += 1
        e = _Event(time, func, name, args, kwargs)
        self._eventlist.insert(e)
        return e

    def _event_time(self, caller, offset, until):
        if until is None and offset is None:
            # if both are missing, it's now!
            return self.now
        elif until is not None and offset is not None:
            errmsg = "simulator.%s(until=%r, offset=%r) duplicate specification" % \
                     (caller, until, offset)
            log.error(errmsg)
            raise ValueError(errmsg)
        elif offset is not None:
            if offset < 0:
                errmsg = "simulator.%s(offset=%r) negative offset" % (caller, offset)
                log.error(errmsg)
                raise ValueError(errmsg)
            return self.now + offset
        elif until < self.now:
            errmsg = "simulator.%s(until=%r) earlier than now (%r)" % (caller, until, self.now)
            log.error(errmsg)
            raise ValueError(errmsg)
        else:
            return until

    def run(self, observer=None, offset=None, until=None):
        """Run simulation and process events.

        This method processes the events in timestamp order and
        advances the simulation time accordingly.

        Args:
            observer (function): an optional function invoked with no
                arguments after each processed event; if it returns
                STEP.HALT, the simulator stops right away and leaves
                the remaining events on the event list untouched

            offset (float): relative time from now until which the
                simulator should advance its simulation time; if
                provided, it must be a non-negative value

            until (float): the absolute time until which the simulator
                should advance its simulation time; if provided, it
                must not be earlier than the current time

        The user can specify either 'offset' or 'until', but not both;
        if both are ignored, the simulator will run as long as there
        are events on the event list (or until the observer asks to
        halt). Be careful, in this case, the simulator may run forever
        for some models as there could always be events scheduled in
        the future.

        Returns:
            True if the run was halted by the observer; False
            otherwise.

        """

        if until is None and offset is None:
            upper = infinite_time
        else:
            upper = self._event_time("run", offset, until)

        log.info("simulator '%s' running from time %g" % (self.name, self.now))
        halted = self._run(observer, upper)
        if halted:
            self._runtime["halts"] += 1
            log.info("simulator '%s' halted by observer at time %g" % (self.name, self.now))
        elif upper < infinite_time:
            # don't wind back the clock if the horizon is given
            self._eventlist.last = upper
            self.now = upper
        return halted

    def _run(self, observer, upper):
        # this is the main event loop of the simulator!
        while len(self._eventlist) > 0:
            if self._eventlist.get_min() >= upper: break
            self._process_one_event()
            if observer is not None and observer() == STEP.HALT:
                return True
        return False

    def step(self):
        """Process only one event.

        This method processes the next event and advances the
        simulation time to the time of the event. If no event is
        available on the event list, this method does nothing.

        """

        if len(self._eventlist) > 0:
            self._process_one_event()

    def peek(self):
        """Return the time of the next scheduled event, or infinity if no
        future events are available."""

        if len(self._eventlist) > 0:
            return self._eventlist.get_min()
        else:
            return infinite_time

    def _process_one_event(self):
        e = self._eventlist.delete_min()
        self.now = e.time
        self._runtime["executed_events"] += 1
        e.fire()

    def rng(self):
        """Return the pseudo-random number generator attached to this
        simulator. It's a random.Random instance (Mersenne twister)."""

        if self._rng is None:
            if self.seed is not None:
                self._rng = random.Random(self.seed)
            else:
                u = uuid.uuid3(_namespace, self.name)
                self._rng = random.Random(u.int >> 32)
        return self._rng

    def show_calendar(self):
        """Print the list of all future events currently on the event
        list. This is an expensive operation and should be used
        responsively, possibly just for debugging purposes."""

        print("list of all future events (num=%d) at time %g on simulator '%s':" %
              (len(self._eventlist), self.now, self.name))
        for e in self._eventlist:
            print("  %s" % e)

    def show_runtime_report(self, prefix=''):
        """Print a report on the simulator's runtime performance.

        Args:
            prefix (str): all print-out lines will be prefixed by this
                string (the default is empty)

        """

        t = time.time()-self._runtime["start_clock"]
        print('%s*********** simulator performance metrics ***********' % prefix)
        print('%ssimulator name: %s' % (prefix, self.name))
        print('%ssimulation time: %g' % (prefix, self.now-self.init_time))
        print('%sexecution time: %g' % (prefix, t))
        print('%ssimulation to real time ratio: %g' % (prefix, (self.now-self.init_time)/t))
        print('%sscheduled events: %d (rate=%g)' %
              (prefix, self._runtime["scheduled_events"], self._runtime["scheduled_events"]/t))
        print('%sexecuted events: %d (rate=%g)' %
              (prefix, self._runtime["executed_events"], self._runtime["executed_events"]/t))
        print('%spending events: %d' % (prefix, len(self._eventlist)))
        print('%shalts by observer: %d' % (prefix, self._runtime["halts"]))
