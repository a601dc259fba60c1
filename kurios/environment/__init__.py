"""
KuriOS Environment Module

The live environment and its JSON file format.
"""

from .codec import EnvironmentCodec, LoadedEnvironment
from .environment import Environment

__all__ = [
    'EnvironmentCodec',
    'LoadedEnvironment',
    'Environment',
]
