"""
KuriOS Variables Module

System variables, including the shiftable ``time`` clock.
"""

from .store import Variable, ClockVariable, VariableStore, VERSION_VARIABLE, TIME_VARIABLE, NOW_TOKEN

__all__ = [
    'Variable',
    'ClockVariable',
    'VariableStore',
    'VERSION_VARIABLE',
    'TIME_VARIABLE',
    'NOW_TOKEN',
]
