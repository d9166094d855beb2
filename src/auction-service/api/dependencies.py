"""API dependency injection.

There is no authentication yet: the caller is identified by the optional
``X-Seller`` header and otherwise by the configured default seller.
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from neuroglia.mediation.mediator import Mediator

from application.settings import app_settings

log = logging.getLogger(__name__)


async def get_mediator(request: Request) -> Mediator:
    """Get the mediator from DI container.

    Args:
        request: FastAPI request

    Returns:
        Mediator instance

    Raises:
        HTTPException: If mediator not found
    """
    # Try to get from services container first (neuroglia pattern)
    services = getattr(request.app.state, "services", None)
    if services is not None:
        mediator = services.get_service(Mediator)
        if mediator is not None:
            return mediator

    mediator = getattr(request.app.state, "mediator", None)
    if mediator is not None:
        return mediator

    log.error("Mediator not found in app state or services")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Service not properly initialized",
    )


async def get_seller(x_seller: str | None = Header(default=None, description="Identity of the caller listing the vehicle")) -> str:
    """Resolve the identity of the caller.

    Args:
        x_seller: Optional ``X-Seller`` request header

    Returns:
        The header value when set, the configured default seller otherwise
    """
    if x_seller and x_seller.strip():
        return x_seller.strip()
    return app_settings.default_seller


# Type aliases for dependency injection
MediatorDep = Annotated[Mediator, Depends(get_mediator)]
SellerDep = Annotated[str, Depends(get_seller)]
