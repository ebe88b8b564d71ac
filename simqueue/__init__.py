# FILE INFO ###################################################
# Author: Jason Liu <jasonxliu2010@gmail.com>
# Created on September 28, 2019
# Last Update: Time-stamp: <2019-10-04 10:02:16 liux>
###############################################################

"""Simqueue is an event-driven M/M/1 queue simulator in Python."""

import sys

if sys.version_info[:2] < (3, 6):
    raise ImportError("Simqueue requires Python 3.6 and above (%d.%d detected)." %
                      sys.version_info[:2])

from .utils import *
from .simulator import *
from .variate import *
from .mm1 import *
from .driver import *

__version__ = '0.1.0'
