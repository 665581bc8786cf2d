# app/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import decode_access_token
from app.db.session_async import get_async_db
from app.schemas.user import TokenPayload
from app.services.category_handler import CategoryHandler
from app.services.category_service import CategoryService


# Los tokens se emiten fuera de esta API; solo se verifican aquí.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    cred_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        token_data = TokenPayload(**decode_access_token(token))
    except JWTError:
        raise cred_exc

    if token_data.sub is None:
        raise cred_exc
    return token_data


def get_category_service(db: AsyncSession = Depends(get_async_db)) -> CategoryService:
    return CategoryService(db)


def get_category_handler(service: CategoryService = Depends(get_category_service)) -> CategoryHandler:
    return CategoryHandler(service)
