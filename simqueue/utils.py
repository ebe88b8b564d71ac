# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on July 2, 2019
# Last Update: Time-stamp: <2019-10-02 11:05:13 liux>
###############################################################

import math, re

__all__ = ["STEP", "WelfordStats", "TimeMarks", "DataSeries", "TimeSeries", "DataCollector"]

class STEP:
    """Signals returned by a run observer to the simulator's event loop."""
    CONTINUE    = 0  # keep processing events
    HALT        = 1  # stop right away, leaving the pending events alone

class WelfordStats(object):
    """Welford's one-pass algorithm to get simple statistics (including
    the mean and variance) from a series of data."""

    def __init__(self):
        self._n = 0
        self._mean = 0.0
        self._varsum = 0.0
        self._max = float('-inf')
        self._min = float('inf')

    def __len__(self): return self._n

    def push(self, x):
        """Add data to the series."""
        self._n += 1
        if x > self._max: self._max = x
        if x < self._min: self._min = x
        d = x-self._mean
        self._varsum += d*d*(self._n-1)/self._n
        self._mean += d/self._n

    def min(self): return self._min
    def max(self): return self._max
    def mean(self): return self._mean
    def stdev(self): return math.sqrt(self._varsum/self._n)
    def var(self): return self._varsum/self._n

class TimeMarks(object):
    """A series of (non-decreasing) time instances, such as the times
    customers arrive at the queue."""

    def __init__(self, keep_data=False):
        self._data = [] if keep_data else None
        self._n = 0
        self._last = None

    def __len__(self):
        """Return the number of collected samples."""
        return self._n

    def _push(self, t):
        if self._n > 0 and t < self._last:
            raise ValueError("TimeMarks._push(%g) earlier than last entry (%g)" %
                             (t, self._last))
        if self._data is not None:
            self._data.append(t)
        self._n += 1
        self._last = t

    def data(self):
        """Return all samples if keep_data has been set; otherwise, None."""
        return self._data

    def rate(self, t=None):
        """Return the average number of samples per time unit up to the
        given time; if t is ignored, up to the time of the last entry."""
        if self._n == 0: return 0
        if t is None: t = self._last
        elif t < self._last:
            raise ValueError("TimeMarks.rate(t=%g) earlier than last entry (%g)" %
                             (t, self._last))
        return self._n/t if t > 0 else float('inf')

class DataSeries(object):
    """A series of numbers, such as the waiting times of customers."""

    def __init__(self, keep_data=False):
        self._data = [] if keep_data else None
        self._rs = WelfordStats()

    def __len__(self):
        """Return the number of collected samples."""
        return len(self._rs)

    def _push(self, d):
        if self._data is not None:
            self._data.append(d)
        self._rs.push(d)

    def data(self):
        """Return all samples if keep_data has been set; otherwise, None."""
        return self._data

    def mean(self):
        """Return the sample mean."""
        return self._rs.mean() if len(self._rs) > 0 else 0

    def stdev(self):
        """Return the sample standard deviation."""
        return self._rs.stdev() if len(self._rs) > 1 else float('inf')

    def var(self):
        """Return the sample variance."""
        return self._rs.var() if len(self._rs) > 1 else float('inf')

    def min(self):
        return self._rs.min() if len(self._rs) > 0 else float('-inf')

    def max(self):
        return self._rs.max() if len(self._rs) > 0 else float('inf')

class TimeSeries(DataSeries):
    """A series of time-value pairs, such as the number of customers in
    system whenever it changes. Besides the statistics of the values,
    a time series also keeps the area under the curve so that one can
    get the average value over time."""

    def __init__(self, keep_data=False):
        super().__init__(keep_data)
        self._area = 0
        self._last_t = None
        self._last_v = None

    def _push(self, d):
        t, v = d
        if len(self._rs) == 0:
            self._last_t, self._last_v = t, v
        elif t < self._last_t:
            raise ValueError("TimeSeries._push(%r) earlier than last entry (%g)" %
                             (d, self._last_t))
        super()._push(v)
        if self._data is not None:
            self._data[-1] = d
        self._area += (t-self._last_t)*self._last_v
        self._last_t, self._last_v = t, v

    def avg_over_time(self, t=None):
        """Return the average value over time. If t is ignored, it's the
        average up to the time of the last entry."""
        if len(self._rs) == 0: return 0
        if t is None: t = self._last_t
        elif t < self._last_t:
            raise ValueError("TimeSeries.avg_over_time(t=%g) earlier than last entry (%g)" %
                             (t, self._last_t))
        if t <= 0: return self._last_v
        return (self._area+(t-self._last_t)*self._last_v)/t

class DataCollector(object):
    """Statistics collection for the queueing model.

    The keyworded arguments name the attributes to be collected, and
    the value of each names the kind of collection: 'timemarks',
    'dataseries', or 'timeseries'. Appending '(all)' also keeps the
    raw samples, e.g., DataCollector(queue_times='dataseries(all)').

    """

    _patterns = (
        (re.compile(r'timemarks\s*(\(\s*(all)?\s*\))?$'), TimeMarks),
        (re.compile(r'dataseries\s*(\(\s*(all)?\s*\))?$'), DataSeries),
        (re.compile(r'timeseries\s*(\(\s*(all)?\s*\))?$'), TimeSeries),
    )

    def __init__(self, **kwargs):
        self._attrs = {}
        for k, v in kwargs.items():
            if hasattr(self, k):
                raise ValueError("DataCollector attribute %s already exists" % k)
            for pat, cls in self._patterns:
                m = pat.match(v)
                if m is not None:
                    setattr(self, k, cls(bool(m.group(2))))
                    self._attrs[k] = getattr(self, k)
                    break
            else:
                raise ValueError("DataCollector() %r has unknown value (%r)" % (k, v))

    def _sample(self, k, v):
        if k in self._attrs:
            self._attrs[k]._push(v)

    def report(self, t=None):
        """Print out the collected statistics nicely. If t is provided, it's
        expected to be the simulation end time; if t is ignored, the
        statistics are up to the time of the last sample."""

        for k, v in self._attrs.items():
            kind = type(v).__name__.lower()
            print("%s (%s): samples=%d" % (k, kind, len(v)))
            if len(v) == 0:
                continue
            d = v.data()
            if d is not None:
                print("  data=%r ..." % d[:3])
            if isinstance(v, TimeMarks):
                print('  rate = %g' % v.rate(t))
                continue
            print('  mean = %g' % v.mean())
            if len(v) > 1:
                print('  stdev = %g' % v.stdev())
            print('  min = %g' % v.min())
            print('  max = %g' % v.max())
            if isinstance(v, TimeSeries):
                print("  avg_over_time = %g" % v.avg_over_time(t))
