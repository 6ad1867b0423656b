"""
Shared utilities.
"""

from .profiling import StageProfiler


__all__ = ['StageProfiler']
