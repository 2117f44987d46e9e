from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from spark2scale.database import Base


class DocumentVersion(Base):
    __tablename__ = "document_versions"

    vid = Column(Text, primary_key=True)
    document_id = Column(Text, ForeignKey("documents.did", ondelete="CASCADE"), nullable=False)
    startup_id = Column(Text, nullable=False)
    version_number = Column(Integer, nullable=False)
    path = Column(Text, nullable=False)
    stored_path = Column(Text, nullable=False)
    generated_by = Column(Text, nullable=False, default="manual")  # "manual" or "AI"
    created_at = Column(Text, nullable=False)

    document = relationship("Document", back_populates="versions")
