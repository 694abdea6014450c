from .core import *
from .msm import MarkovStateModel
from .implied_timescales import implied_timescales, scan
