"""
Media Models

``File`` holds the stored file itself; ``MediaFile`` adds the descriptive
metadata shown with an article.  Only the metadata is translated, picked
by column type (title and description).
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from translatable.core.engine import translatable
from translatable.database import Base


class File(Base):
    """Stored file"""

    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String, nullable=False, index=True)
    mime_type = Column(String, nullable=True)
    kind = Column(String(32), nullable=False, default="file")
    uploaded_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    __mapper_args__ = {"polymorphic_on": kind, "polymorphic_identity": "file"}

    def __repr__(self):
        return f"<File(id={self.id}, filename={self.filename})>"


@translatable
class MediaFile(File):
    """File attached to an article"""

    __tablename__ = "media_files"

    id = Column(Integer, ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=True, index=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)

    article = relationship("Article", back_populates="media")

    __mapper_args__ = {"polymorphic_identity": "media"}
