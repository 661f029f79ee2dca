"""Configuration classes."""

from .family import Family
from .genz_keister import GenzKeister
