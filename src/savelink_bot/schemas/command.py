"""Pydantic schemas for the save-link command.

Defines CommandRequest, ExtractionResult and IssueRecord.
"""

from pydantic import BaseModel
from typing import Optional

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 500

# URL (or other identifier) of a created tracking issue
IssueReference = str

class CommandRequest(BaseModel):
    url: str
    title_override: Optional[str] = None
    requester_id: str
    requester_name: Optional[str] = None

    @property
    def submitted_by(self) -> str:
        return self.requester_name or self.requester_id

class ExtractionResult(BaseModel):
    title: str
    description: str
    source_url: str

class IssueRecord(BaseModel):
    title: str
    description: str
    url: str
    submitted_by: str
