# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on June 14, 2019
# Last Update: Time-stamp: <2019-10-02 10:21:47 liux>
###############################################################

"""Simulation events and the event list."""

import heapq
from itertools import count

__all__ = ["_Event", "_EventList_", "infinite_time", "minus_infinite_time"]

# two extremes of simulation time
infinite_time = float('inf')
minus_infinite_time = float('-inf')

class _Event(object):
    """A simulation event is a function to be invoked at a given
    simulation time, possibly with arguments."""

    def __init__(self, time, func, name, usr_args, usr_kwargs):
        self.time = time
        self.func = func
        self.name = name
        self.args = usr_args
        self.kwargs = usr_kwargs

    def __str__(self):
        return "%g: evt=%s" % \
            (self.time, self.name if self.name else self.func.__name__+'()')

    def fire(self):
        return self.func(*self.args, **self.kwargs)

class _EventList_(object):
    """An event list sorts events in timestamp order.

    An event list is a priority queue (a binary heap) that stores and
    sorts simulation events based on the time of the events. Events
    with the same timestamp come out in the order they were inserted;
    each entry carries a sequence number that breaks the tie. The
    event list supports three basic operations: to insert a (future)
    event, to peek and to retrieve the event with the minimal
    timestamp.

    """

    def __init__(self):
        self.pqueue = []
        self.last = minus_infinite_time
        self._seq = count()

    def __len__(self):
        return len(self.pqueue)

    def __iter__(self):
        # events in the order they will be processed
        for t, s, e in sorted(self.pqueue):
            yield e

    def insert(self, evt):
        if self.last <= evt.time:
            heapq.heappush(self.pqueue, (evt.time, next(self._seq), evt))
        else:
            raise ValueError("EventList.insert(%s): past event (last=%g)" %
                             (evt, self.last))

    def get_min(self):
        if len(self.pqueue) > 0:
            return self.pqueue[0][0] # just return the time
        else:
            raise IndexError("EventList.get_min() from empty list")

    def delete_min(self):
        if len(self.pqueue) > 0:
            t, s, e = heapq.heappop(self.pqueue)
            assert self.last <= t
            self.last = t
            return e
        else:
            raise IndexError("EventList.delete_min() from empty list")
