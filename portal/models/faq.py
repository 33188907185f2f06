"""FAQ model."""

from sqlalchemy import Column, String, Text

from portal.db.base import Base


class Faq(Base):
    """Support question/answer pair used as chatbot context."""

    __tablename__ = "faqs"

    question = Column(String(500), nullable=False, index=True)
    answer = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Faq {self.question[:40]}>"
