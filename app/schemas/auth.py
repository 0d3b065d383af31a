from typing import Optional

from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
