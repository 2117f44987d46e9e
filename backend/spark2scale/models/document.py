from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from spark2scale.database import Base


class Document(Base):
    __tablename__ = "documents"

    did = Column(Text, primary_key=True)
    startup_id = Column(Text, ForeignKey("startups.sid", ondelete="CASCADE"), nullable=False)
    document_name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    current_path = Column(Text)
    current_version = Column(Integer, nullable=False, default=1)
    canaccess = Column(Integer, nullable=False, default=1)
    is_current = Column(Boolean, nullable=False, default=True)
    file_hash = Column(Text)
    mime_type = Column(Text)
    updated_at = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)

    startup = relationship("Startup", back_populates="documents")
    versions = relationship(
        "DocumentVersion",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentVersion.version_number.desc()",
    )
