"""
Services package for the HypePulse bot.

Upstream access, caching, stat formatting and command routing.
"""

from .base import BaseService
from .result_cache import ResultCache
from .upstream import UpstreamClient

__all__ = ['BaseService', 'ResultCache', 'UpstreamClient']
