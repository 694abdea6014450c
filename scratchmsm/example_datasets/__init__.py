from .base import Bunch
from .brownian1d import DoubleWell, load_doublewell, discretize
from .two_state import TwoState, load_two_state, two_state_timescale

__all__ = [
    'Bunch',
    'DoubleWell',
    'load_doublewell',
    'discretize',
    'TwoState',
    'load_two_state',
    'two_state_timescale',
]
