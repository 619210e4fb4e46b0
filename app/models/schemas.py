"""
Pydantic Models and Schemas

Defines the router settings and the analysis API request/response models.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RouterSettings(BaseModel):
    """
    Immutable settings handed to the site router at startup.

    Attributes:
        api_prefix: URL prefix where the API collaborator is mounted
        static_root: Directory served as static assets
        fallback_file: File sent when no other rule matches
        fallback_status: Status code of the fallback response
        fallback_methods: Methods the fallback answers (None means any)
    """
    model_config = ConfigDict(frozen=True)

    api_prefix: str = Field("/api", description="API mount prefix")
    static_root: str = Field("public_html", description="Static asset directory")
    fallback_file: str = Field("public_html/index.html", description="Fallback resource")
    fallback_status: int = Field(200, ge=100, le=599, description="Fallback status code")
    fallback_methods: Optional[List[str]] = Field(None, description="Fallback methods")

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        prefix = "/" + value.strip("/")
        if prefix == "/":
            raise ValueError("api_prefix must not be the site root")
        return prefix

    @field_validator("fallback_methods")
    @classmethod
    def normalize_methods(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return [method.upper() for method in value]


class AnalysisIn(BaseModel):
    """
    Schema for an analysis request.

    Attributes:
        text: The text to analyse
        options: Backend specific options, passed through untouched
    """
    text: str = Field(..., min_length=1, max_length=100000, description="Text to analyse")
    options: Dict[str, Any] = Field(default_factory=dict, description="Analysis options")


class AnalysisResponse(BaseModel):
    """Schema for an analysis result."""
    backend: str = Field(..., description="Backend that produced the result")
    result: Any = Field(..., description="Result returned by the analysis program")


class HealthResponse(BaseModel):
    """
    Schema for the API health endpoint.

    Attributes:
        status: 'healthy' when a backend is configured, otherwise 'degraded'
        version: Application version
        backend: Configured analysis backend
        backend_configured: Whether the backend has a command/URL
    """
    status: str = Field(..., description="Overall API status")
    version: str = Field(..., description="Application version")
    backend: str = Field(..., description="Analysis backend in use")
    backend_configured: bool = Field(..., description="Backend configuration status")
