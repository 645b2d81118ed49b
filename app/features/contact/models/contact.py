import enum

from sqlalchemy import Column, DateTime, Enum, String, Text

from app.platform.db.base import BaseModel


class ContactStatus(str, enum.Enum):
    new = "new"
    read = "read"
    replied = "replied"


class Contact(BaseModel):
    __tablename__ = "contacts"

    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(
        Enum(ContactStatus, name="contact_status"),
        default=ContactStatus.new,
        nullable=False,
        index=True,
    )
    reply = Column(Text, nullable=True)
    reply_date = Column(DateTime, nullable=True)
    ip_address = Column(String(45), nullable=True)

    def __repr__(self):
        return f"<Contact(id={self.id}, email={self.email}, status={self.status})>"
