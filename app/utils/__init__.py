"""
Utility Functions

Common helper functions and utilities.
"""

from .performance import timer, timer_context

__all__ = ['timer', 'timer_context']
