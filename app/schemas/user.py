# app/schemas/user.py
from pydantic import BaseModel
from typing import Optional, List


class TokenPayload(BaseModel):
    # sub es el id del usuario (entero serializado como str en el JWT).
    sub: str | None = None
    exp: Optional[int] = None
    iat: Optional[int] = None
    jti: Optional[str] = None
    type: Optional[str] = None
    scopes: Optional[List[str]] = None
