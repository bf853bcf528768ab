import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class Severity(str, enum.Enum):
    """Ordinal: error is worst, pass needs no action."""
    ERROR = "error"
    WARNING = "warning"
    PASS = "pass"


class AuditIssue(BaseModel):
    id: str
    title: str
    severity: Severity
    description: str
    suggestion: Optional[str] = None


class PageStats(BaseModel):
    internal_links_count: int
    images_count: int
    word_count: int
    security_grade: str


class AnalysisResult(BaseModel):
    """Scored payload of one analysis run, before it is stored."""
    overall_score: int
    performance_score: int
    accessibility_score: int
    seo_score: int
    technical_score: int
    performance_issues: List[AuditIssue]
    seo_issues: List[AuditIssue]
    accessibility_issues: List[AuditIssue]
    technical_issues: List[AuditIssue]
    scan_duration_ms: int
    internal_links_count: int
    images_count: int
    word_count: int
    security_grade: str


class AuditIn(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def url_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("URL is required")
        return value


class AuditOut(AnalysisResult):
    id: str
    user_id: str
    url: str
    scanned_at: datetime

    class Config:
        from_attributes = True


class AuditDeleted(BaseModel):
    id: str
    deleted: bool = True
