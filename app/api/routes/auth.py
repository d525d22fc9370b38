"""
Admin login.

A single configured admin account (``admin``/``admin`` unless overridden)
exchanges its credentials for a bearer token.
"""
import logging

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import ValidationError

from app.core.security import verify_admin_credentials, create_access_token
from app.schemas.auth import AdminLoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin Auth"])


async def _read_credentials(request: Request) -> AdminLoginRequest:
    """Accept JSON or form-encoded (OAuth2 password flow) credentials."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            payload = await request.json()
        else:
            form = await request.form()
            payload = {"username": form.get("username"), "password": form.get("password")}
        if not isinstance(payload, dict):
            raise ValueError("Credentials must be an object")
        return AdminLoginRequest(**payload)
    except (ValidationError, ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: username and password"
        )


@router.post("/login", response_model=TokenResponse)
async def login(request: Request):
    credentials = await _read_credentials(request)

    if not verify_admin_credentials(credentials.username, credentials.password):
        logger.warning("Admin login failed")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token({"sub": credentials.username, "role": "admin"})
    logger.info("Admin logged in")

    return TokenResponse(access_token=token, token_type="bearer")
