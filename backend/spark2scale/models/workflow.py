from sqlalchemy import Boolean, Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from spark2scale.database import Base


STAGE_COLUMNS = (
    "idea_check",
    "market_research",
    "evaluation",
    "recommendation",
    "documents",
    "pitch_deck",
)


class StartupWorkflow(Base):
    __tablename__ = "startup_workflow"

    startup_id = Column(Text, ForeignKey("startups.sid", ondelete="CASCADE"), primary_key=True)
    idea_check = Column(Boolean, nullable=False, default=False)
    market_research = Column(Boolean, nullable=False, default=False)
    evaluation = Column(Boolean, nullable=False, default=False)
    recommendation = Column(Boolean, nullable=False, default=False)
    documents = Column(Boolean, nullable=False, default=False)
    pitch_deck = Column(Boolean, nullable=False, default=False)
    updated_at = Column(Text, nullable=False)

    startup = relationship("Startup", back_populates="workflow")

    def stage_flags(self) -> list[bool]:
        return [bool(getattr(self, name)) for name in STAGE_COLUMNS]
