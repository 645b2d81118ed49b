from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.schemas.auth import CurrentAdmin
from app.features.admin.utils.auth import require_admin
from app.features.contact.models.contact import ContactStatus
from app.features.contact.schemas.contact import (
    ContactCreateRequest,
    ContactReplyRequest,
    ContactResponse,
    ContactStatusUpdateRequest,
)
from app.features.contact.services.contact import ContactService
from app.platform.db.session import get_db
from app.platform.response import api_response
from app.platform.schemas import Pagination
from app.platform.services.email import Mailer, get_mailer
from app.platform.utils.client import get_client_ip

router = APIRouter(prefix="/contact", tags=["Contact"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: ContactCreateRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Contact form submission
    - Stores the message with the sender's IP
    - Emails the site owner in the background
    """
    contact = await ContactService(db).create_contact(payload, ip_address=get_client_ip(request))
    data = ContactResponse.model_validate(contact)

    background_tasks.add_task(
        ContactService.send_contact_notification, mailer, data.model_dump(mode="json")
    )

    return api_response(
        data={"id": data.id, "status": data.status},
        message="Thank you for contacting us. We'll get back to you soon!",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/admin")
async def list_contacts(
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    contacts, total = await ContactService(db).list_contacts(status=status_filter, page=page, limit=limit)

    return api_response(
        data={
            "contacts": [ContactResponse.model_validate(c) for c in contacts],
            "pagination": Pagination.build(page, limit, total),
        },
        message="Contacts retrieved successfully",
    )


@router.get("/admin/stats")
async def contact_stats(
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    stats = await ContactService(db).get_stats()
    return api_response(data=stats, message="Contact statistics retrieved successfully")


@router.get("/admin/{contact_id}")
async def get_contact(
    contact_id: str,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    contact = await ContactService(db).open_contact(contact_id)
    return api_response(
        data=ContactResponse.model_validate(contact),
        message="Contact retrieved successfully",
    )


@router.patch("/admin/{contact_id}/status")
async def update_contact_status(
    contact_id: str,
    payload: ContactStatusUpdateRequest,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    contact = await ContactService(db).update_status(contact_id, payload.status)
    return api_response(
        data=ContactResponse.model_validate(contact),
        message="Contact status updated successfully",
    )


@router.post("/admin/{contact_id}/reply")
async def reply_to_contact(
    contact_id: str,
    payload: ContactReplyRequest,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Save the reply and email it to the sender.
    The reply is kept even when delivery fails; ``email_delivered`` says which happened.
    """
    contact = await ContactService(db).save_reply(contact_id, payload.reply)
    delivered = await ContactService.send_contact_reply(mailer, contact)

    return api_response(
        data={
            "contact": ContactResponse.model_validate(contact),
            "email_delivered": delivered,
        },
        message=(
            "Reply sent successfully"
            if delivered
            else "Reply saved but the email could not be delivered"
        ),
    )


@router.delete("/admin/{contact_id}")
async def delete_contact(
    contact_id: str,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await ContactService(db).delete_contact(contact_id)
    return api_response(data={}, message="Contact deleted successfully")
