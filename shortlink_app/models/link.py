from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from shortlink_app.config import settings
from shortlink_app.database.connection import Base


class Link(Base):
    """
    A short code mapped to its destination URL.
    
    Everything except click_count is written once at creation.
    Uniqueness of short_code is enforced here, by the database, so that
    concurrent creators cannot both insert the same code.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # Sized from settings so longer codes fit; unique=True also creates the index
    short_code = Column(String(settings.short_code_length), unique=True, nullable=False, index=True)
    long_url = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    click_count = Column(Integer, nullable=False, default=0, server_default="0")

    def __repr__(self):
        return f"<Link {self.short_code} -> {self.long_url}>"
