from typing import List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.contact.models.contact import Contact, ContactStatus
from app.features.contact.schemas.contact import ContactCreateRequest, ContactStats
from app.platform.config import settings
from app.platform.exceptions import EmailDeliveryError, NotFound
from app.platform.logger import get_logger
from app.platform.services.email import Mailer
from app.platform.utils.clock import utcnow

logger = get_logger(__name__)


class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_contact(self, data: ContactCreateRequest, ip_address: Optional[str] = None) -> Contact:
        contact = Contact(
            name=data.name,
            email=data.email,
            phone=data.phone,
            subject=data.subject,
            message=data.message,
            status=ContactStatus.new,
            ip_address=ip_address,
        )
        self.db.add(contact)
        await self.db.commit()
        await self.db.refresh(contact)

        logger.info(f"Contact submission stored: {contact.id}")
        return contact

    async def list_contacts(
        self, status: Optional[ContactStatus] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[Contact], int]:
        query = select(Contact)
        count_query = select(func.count(Contact.id))
        if status is not None:
            query = query.where(Contact.status == status)
            count_query = count_query.where(Contact.status == status)

        total = await self.db.scalar(count_query) or 0
        result = await self.db.execute(
            query.order_by(Contact.created_at.desc(), Contact.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def get_contact(self, contact_id: str) -> Contact:
        contact = await self.db.get(Contact, contact_id)
        if not contact:
            raise NotFound("Contact not found")
        return contact

    async def open_contact(self, contact_id: str) -> Contact:
        """Fetch a message for the inbox view; unread messages become read."""
        contact = await self.get_contact(contact_id)
        if contact.status == ContactStatus.new:
            contact.status = ContactStatus.read
            await self.db.commit()
            await self.db.refresh(contact)
        return contact

    async def update_status(self, contact_id: str, status: ContactStatus) -> Contact:
        contact = await self.get_contact(contact_id)
        contact.status = status
        await self.db.commit()
        await self.db.refresh(contact)
        return contact

    async def save_reply(self, contact_id: str, reply: str) -> Contact:
        contact = await self.get_contact(contact_id)
        contact.reply = reply
        contact.reply_date = utcnow()
        contact.status = ContactStatus.replied
        await self.db.commit()
        await self.db.refresh(contact)

        logger.info(f"Reply saved for contact {contact.id}")
        return contact

    async def delete_contact(self, contact_id: str) -> None:
        contact = await self.get_contact(contact_id)
        await self.db.delete(contact)
        await self.db.commit()
        logger.info(f"Contact deleted: {contact_id}")

    async def get_stats(self) -> ContactStats:
        result = await self.db.execute(
            select(Contact.status, func.count(Contact.id)).group_by(Contact.status)
        )
        counts = {ContactStatus(row[0]).value: row[1] for row in result.all()}
        return ContactStats(total=sum(counts.values()), **counts)

    # ── E-mail ─────────────────────────────────────────────────────────

    @staticmethod
    def send_contact_notification(mailer: Mailer, contact: dict) -> None:
        """
        Tell the site owner about a new submission.
        Runs as a background task, so failures are only logged.
        """
        body = mailer.render(
            "contact_notification.html",
            company_name=settings.COMPANY_NAME,
            submitted_at=contact.get("created_at"),
            **{k: contact.get(k) for k in ("name", "email", "phone", "subject", "message")},
        )
        try:
            mailer.send_email(
                settings.MAIL_ADMIN_EMAIL,
                f"New Contact Form Submission: {contact['subject']}",
                body,
                reply_to=contact["email"],
            )
        except EmailDeliveryError as e:
            logger.error(f"Contact notification for {contact.get('id')} not delivered: {e}")

    @staticmethod
    async def send_contact_reply(mailer: Mailer, contact: Contact) -> bool:
        """Email the saved reply to the sender. Returns False when delivery fails."""
        body = mailer.render(
            "contact_reply.html",
            company_name=settings.COMPANY_NAME,
            name=contact.name,
            reply=contact.reply,
            subject=contact.subject,
            original_message=contact.message,
        )
        try:
            await run_in_threadpool(
                mailer.send_email,
                contact.email,
                f"Re: {contact.subject}",
                body,
            )
        except EmailDeliveryError as e:
            logger.warning(f"Reply to contact {contact.id} saved but not delivered: {e}")
            return False
        return True
