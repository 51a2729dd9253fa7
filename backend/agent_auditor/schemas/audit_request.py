"""
Pydantic schemas for audit requests.
"""

from typing import Optional
from pydantic import BaseModel, Field

from agent_auditor.config import settings


class AuditFiles(BaseModel):
    """Submitted agent documents; every slot is optional."""
    soul: Optional[str] = Field(None, alias="SOUL.md", max_length=settings.MAX_DOCUMENT_CHARS, description="Persona definition")
    agents: Optional[str] = Field(None, alias="AGENTS.md", max_length=settings.MAX_DOCUMENT_CHARS, description="Agent orchestration definition")
    tools: Optional[str] = Field(None, alias="TOOLS.md", max_length=settings.MAX_DOCUMENT_CHARS, description="Tool manifest")
    config: Optional[str] = Field(None, max_length=settings.MAX_DOCUMENT_CHARS, description="Runtime configuration")
    memory: Optional[str] = Field(None, max_length=settings.MAX_DOCUMENT_CHARS, description="Memory or log excerpt")

    class Config:
        populate_by_name = True

    def to_mapping(self) -> dict[str, Optional[str]]:
        """Wire-named mapping, as the document set expects it."""
        return self.model_dump(by_alias=True)


class AuditRequest(BaseModel):
    """Request to run an audit."""
    files: AuditFiles = Field(default_factory=AuditFiles, description="Documents to audit")

    class Config:
        json_schema_extra = {
            "example": {
                "files": {
                    "SOUL.md": "# Agent Soul\nThis agent helps users with tasks.",
                    "config": "dmPolicy: strict\nallowFrom: trusted-sources\nsessionId: enabled"
                }
            }
        }
