"""
Routes

The site router that dispatches every request, and the analysis API routes.
"""

from .site import SiteRouter, ApiRule, StaticRule, FallbackRule
from .analysis import router as analysis_router

__all__ = ['SiteRouter', 'ApiRule', 'StaticRule', 'FallbackRule', 'analysis_router']
