"""FastAPI authorization dependencies.

The admin check trusts a role header set by the frontend. Nothing signs or
verifies that header, so any client can claim the role; it gates UI flows,
not data.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from learnhub.exceptions import ForbiddenError
from learnhub.shared.dependencies import AppSettings


logger = logging.getLogger(__name__)


async def require_admin(request: Request, settings: AppSettings) -> str:
    """Reject the request unless it carries the admin role header.

    Returns
    -------
        str: The role value that was presented
    """
    role = request.headers.get(settings.ADMIN_ROLE_HEADER)
    if role != settings.ADMIN_ROLE_VALUE:
        raise ForbiddenError
    return role


# Usage: async def my_route(_role: AdminRole) -> Response:
AdminRole = Annotated[str, Depends(require_admin)]
