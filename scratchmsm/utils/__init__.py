from .param_sweep import *
from .validation import *
