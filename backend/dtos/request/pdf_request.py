"""
PDF Request DTOs
"""

from typing import Any, Dict, Optional

from pydantic import Field

from dtos.base import CamelModel


class CreatePdfProjectRequest(CamelModel):
    """Request DTO for creating a PDF project."""

    name: Optional[str] = Field(None, description="Project name")
    file_path: Optional[str] = Field(None, description="Path to a PDF on the server")
    settings: Optional[Dict[str, Any]] = Field(None, description="Partial annotation settings")


class UpdatePdfProjectRequest(CamelModel):
    """Request DTO for renaming a PDF project or changing its settings."""

    name: Optional[str] = Field(None, description="New project name")
    status: Optional[str] = Field(None, description="New project status")
    settings: Optional[Dict[str, Any]] = Field(None, description="Settings to merge")
