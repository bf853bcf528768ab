from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String

from korat.platform.db.base import BaseModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Audit(BaseModel):
    """
    One scored analysis run over a single URL.

    Rows are written once and never updated; a re-scan creates a new row.
    Access is always scoped by user_id.
    """
    __tablename__ = "audits"

    user_id = Column(String, index=True, nullable=False)
    url = Column(String, nullable=False)

    overall_score = Column(Integer, nullable=False)
    performance_score = Column(Integer, nullable=False)
    accessibility_score = Column(Integer, nullable=False)
    seo_score = Column(Integer, nullable=False)
    technical_score = Column(Integer, nullable=False)

    performance_issues = Column(JSON, nullable=False, default=list)
    seo_issues = Column(JSON, nullable=False, default=list)
    accessibility_issues = Column(JSON, nullable=False, default=list)
    technical_issues = Column(JSON, nullable=False, default=list)

    scan_duration_ms = Column(Integer, nullable=False)
    internal_links_count = Column(Integer, nullable=False)
    images_count = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    security_grade = Column(String(2), nullable=False)

    scanned_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    __table_args__ = (
        Index("ix_audits_user_scanned_at", "user_id", "scanned_at"),
    )

    def __repr__(self):
        return f"<Audit(id={self.id}, url={self.url}, overall_score={self.overall_score})>"
