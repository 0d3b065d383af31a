import logging

from fastapi import APIRouter, HTTPException, status

from app.core.security import ADMIN_SUBJECT, create_access_token, verify_admin_password
from app.schemas.auth import AdminLoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# ✅ SHARED-SECRET ADMIN LOGIN
@router.post("/login", response_model=TokenResponse)
def admin_login(request: AdminLoginRequest):
    """
    Exchange the shared admin password for a short-lived bearer token.
    """
    if not request.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password is required")

    if not verify_admin_password(request.password):
        logger.warning("Admin login rejected: invalid password")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    token = create_access_token({"sub": ADMIN_SUBJECT})
    logger.info("Admin login succeeded")

    return TokenResponse(token=token)
