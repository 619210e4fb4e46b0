"""
Data models and schemas for the Author Analysis server.
"""

from .schemas import RouterSettings, AnalysisIn, AnalysisResponse, HealthResponse

__all__ = ['RouterSettings', 'AnalysisIn', 'AnalysisResponse', 'HealthResponse']
