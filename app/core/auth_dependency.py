from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core.security import ADMIN_SUBJECT, decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login")


def get_current_admin(token: str = Depends(oauth2_scheme)) -> str:
    """Require a valid admin bearer token; returns the token subject."""
    try:
        payload = decode_access_token(token)
        subject: str = payload.get("sub")

        if subject != ADMIN_SUBJECT:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

        return subject

    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
