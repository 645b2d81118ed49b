from typing import Optional

from fastapi import Request

from app.platform.logger import get_logger

logger = get_logger(__name__)


def get_client_ip(request: Request) -> Optional[str]:
    """Peer address of the connection; proxies must be handled by uvicorn's --proxy-headers."""
    if request.client is None:
        logger.debug("Request has no client address")
        return None
    return request.client.host
