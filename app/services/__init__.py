"""
Service Layer

Contains the analysis backends, separated from the API routes.
"""

from .analysis_client import (
    AnalysisClient,
    AnalysisError,
    CommandAnalysisClient,
    RemoteAnalysisClient,
    create_analysis_client,
)

__all__ = [
    'AnalysisClient',
    'AnalysisError',
    'CommandAnalysisClient',
    'RemoteAnalysisClient',
    'create_analysis_client',
]
