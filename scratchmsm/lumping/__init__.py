from .base import BaseLumper
from .pcca import PCCA

__all__ = ["BaseLumper", "PCCA"]
