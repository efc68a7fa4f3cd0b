"""
Article Model

Editorial content translated per locale: title, summary and body get one
sibling column per target locale (``title__fr_FR``, ``body__de_DE`` ...).
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from translatable.core.engine import translatable
from translatable.core.storage import HTMLText
from translatable.database import Base


@translatable("title", "summary", "body")
class Article(Base):
    """Article model"""

    __tablename__ = "articles"
    __field_labels__ = {"summary": "Teaser"}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    summary = Column(Text, nullable=True)
    body = Column(HTMLText, nullable=True)
    rank = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc)
    )

    media = relationship(
        "MediaFile",
        back_populates="article",
        order_by="MediaFile.sort_order",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Article(id={self.id}, slug={self.slug})>"
