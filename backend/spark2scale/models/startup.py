from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from spark2scale.database import Base


class Startup(Base):
    __tablename__ = "startups"

    sid = Column(Text, primary_key=True)
    startupname = Column(Text, nullable=False)
    field = Column(Text)
    idea_description = Column(Text)
    region = Column(Text)
    startup_stage = Column(Text)
    founder_id = Column(Text)
    created_at = Column(Text, nullable=False)

    documents = relationship("Document", back_populates="startup", cascade="all, delete-orphan")
    workflow = relationship(
        "StartupWorkflow", back_populates="startup", uselist=False, cascade="all, delete-orphan"
    )
