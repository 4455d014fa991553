"""
climate-futures
Speculative climate scenario backend: baseline data, AI "what if" scenarios, constrained forecast curves
"""

__version__ = "0.1.0"

from climate_futures.config import Config, get_config

__all__ = [
    "Config",
    "get_config",
]
