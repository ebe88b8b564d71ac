# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on September 28, 2019
# Last Update: Time-stamp: <2019-10-03 10:12:58 liux>
###############################################################

"""Exponentially distributed random delays for arrivals and services."""

import math

# numpy must be installed as additional python package
import numpy as np

__all__ = ["ExponentialVariate"]

import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

class ExponentialVariate(object):
    """A source of exponential random variates.

    The variates are produced by inverse transform, -ln(u)/rate, from
    uniform random numbers drawn from a numpy RandomState. The uniform
    numbers are generated 100 at a time as a batch. One instance is
    meant to be shared by all the random processes of a model (e.g.,
    both arrivals and services) so that the entire run follows one
    reproducible random sequence.

    """

    BATCH = 100

    def __init__(self, seed):
        """Create the variate generator from a 32-bit integer seed, which
        is normally drawn from the simulator's own random sequence,
        e.g., ExponentialVariate(sim.rng().randrange(2**32))."""

        self._rs = np.random.RandomState(seed)
        self._uniforms = self._uniform_generator()

    def _uniform_generator(self):
        while True:
            for u in self._rs.random_sample(self.BATCH):
                # random_sample() is in [0, 1); zero is skipped so that
                # the delay is always strictly positive
                if u > 0.0:
                    yield float(u)

    def uniform(self):
        """Return the next uniform random number in (0, 1)."""
        return next(self._uniforms)

    def exponential(self, rate):
        """Return an exponentially distributed delay with the given mean
        rate (i.e., the mean delay is 1/rate)."""

        if not rate > 0:
            errmsg = "ExponentialVariate.exponential(rate=%r) non-positive rate" % rate
            log.error(errmsg)
            raise ValueError(errmsg)
        if not math.isfinite(rate):
            errmsg = "ExponentialVariate.exponential(rate=%r) non-finite rate" % rate
            log.error(errmsg)
            raise ValueError(errmsg)
        while True:
            # a very large rate may underflow to zero
            d = -math.log(self.uniform())/rate
            if d > 0: return d
