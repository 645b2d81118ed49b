from sqlalchemy import JSON, Column, String

from app.platform.db.base import BaseModel


class Property(BaseModel):
    """A gallery item shown on the public properties page."""

    __tablename__ = "properties"

    title = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False)
    # Filenames or URLs, in display order
    images = Column(JSON, default=list, nullable=False)

    def __repr__(self):
        return f"<Property(id={self.id}, title={self.title})>"
