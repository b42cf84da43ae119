from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, JSON, CheckConstraint, Index
from sqlalchemy.orm import relationship

from database import Base
from utils.uuid_helper import generate_uuid, utcnow


class VideoProject(Base):
    """
    A video editor project.

    ``settings`` and ``timeline`` are stored as JSON documents; services
    always assign fresh dicts so SQLAlchemy notices the change.

    Statuses: draft, editing, rendering, completed, failed
    """
    __tablename__ = 'video_projects'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default='')
    thumbnail = Column(String, nullable=True)
    status = Column(String, nullable=False, default='draft')
    source_video_url = Column(String, nullable=True)
    settings = Column(JSON, nullable=False)
    timeline = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_video_projects_created', 'created_at'),
    )


class PdfProject(Base):
    """
    A PDF document being annotated.

    ``doc_metadata`` holds the page count, file size and document info read
    from the PDF; ``pages`` holds per-page size and rotation.
    """
    __tablename__ = 'pdf_projects'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    status = Column(String, nullable=False, default='draft')
    original_file = Column(String, nullable=False, default='')
    doc_metadata = Column('metadata', JSON, nullable=False)
    pages = Column(JSON, nullable=False)
    settings = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    annotations = relationship(
        "PdfAnnotation",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="PdfAnnotation.created_at",
    )

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_pdf_projects_created', 'created_at'),
    )


class PdfAnnotation(Base):
    """
    One annotation on a PDF page.

    Geometry and type-specific fields (content, colours, points, ...) live in
    ``data``; ``type`` and ``page_number`` are columns for filtering.
    """
    __tablename__ = 'pdf_annotations'

    id = Column(String, primary_key=True, default=generate_uuid)
    project_id = Column(String, ForeignKey('pdf_projects.id', ondelete='CASCADE'), nullable=False)
    type = Column(String, nullable=False)
    page_number = Column(Integer, nullable=False)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    project = relationship("PdfProject", back_populates="annotations")

    __table_args__ = (
        CheckConstraint("page_number >= 1"),
        Index('idx_pdf_annotations_project', 'project_id'),
    )
