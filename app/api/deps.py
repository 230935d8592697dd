from fastapi import HTTPException, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID
import logging

from app.core.exceptions import NotFoundError
from app.db.database import get_db
from app.models import User
from app.services.identity_service import IdentityService

logger = logging.getLogger(__name__)


# =====================================================
# Get Current user
# =====================================================
async def get_current_user(
    x_user_id: UUID = Header(..., description="Id returned by POST /users"),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency that resolves the X-User-Id header to a user.

    Identity is name-based and unauthenticated; the header only says
    which previously resolved user is acting.

    Raises:
        HTTPException 401: If the id does not belong to a user
    """
    try:
        return await IdentityService(db).get_user(x_user_id)
    except NotFoundError:
        logger.warning(f"Request with unknown user id {x_user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user. Enter your name to continue.",
        )
