"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    records: Dict[str, int]


class UploadFileResult(BaseModel):
    """Outcome of one uploaded file."""
    filename: str
    success: bool
    records: int = 0
    error: Optional[str] = None


class UploadResponse(BaseModel):
    """Response for a multi-file CSV upload."""
    vertical: str
    files: List[UploadFileResult]
    records_added: int
    total_records: int


class AppendRecordsResponse(BaseModel):
    """Response for appending JSON records."""
    vertical: str
    records_added: int
    total_records: int


class QueryRequest(BaseModel):
    """Free-text question for the data assistant."""
    question: str = Field(..., description="Question in plain English, e.g. 'top 5 states'")

    @field_validator("question")
    @classmethod
    def strip_question(cls, v):
        return v.strip()


class QueryResponse(BaseModel):
    """Plain-text answer."""
    answer: str
