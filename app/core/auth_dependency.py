from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core import config
from app.core.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/admin/login")


def get_current_admin(token: str = Depends(oauth2_scheme)) -> str:
    """Get the admin username from the bearer token."""
    try:
        payload = decode_access_token(token)
        username: str = payload.get("sub")

        if username is None or payload.get("role") != "admin":
            raise HTTPException(status_code=401, detail="Invalid token")

        if username != config.ADMIN_USERNAME:
            raise HTTPException(status_code=401, detail="Invalid token")

        return username

    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
