"""Database table definitions for documents and their precomputed artifacts"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class Document(SQLModel, table=True):
    """Raw document content, the source of truth, plus its artifact bundle"""
    __tablename__ = "documents"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(..., index=True, unique=True, nullable=False)
    content: str = Field(..., sa_column=Column(Text, nullable=False))
    show_toc: bool = Field(default=False, nullable=False, description="Whether the TOC is computed and rendered")
    toc: Optional[list[dict[str, Any]]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    reading_time_minutes: int = Field(default=0, ge=0, nullable=False)
    search_text: str = Field(default="", sa_column=Column(Text, nullable=False))
    content_hash: str = Field(..., sa_column=Column(String(64), nullable=False, index=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
