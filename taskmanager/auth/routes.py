"""
Task Manager - User Routes

API endpoints for accounts and tokens:
- POST /users                  - Register and open a first session
- POST /users/login            - Authenticate and open a session
- GET  /users/me/access-token  - Mint an access token from a refresh session

Successful register/login responses carry the token pair in the
x-access-token and x-refresh-token headers. Failures are 400 with an
{"error": ...} body; refresh-session failures are 401 from the guard.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session as DBSession

from taskmanager.auth import credentials
from taskmanager.auth import sessions as session_service
from taskmanager.auth.dependencies import (
    ACCESS_TOKEN_HEADER,
    REFRESH_TOKEN_HEADER,
    SessionContext,
    get_settings,
    verify_session,
)
from taskmanager.auth.models import User
from taskmanager.auth.schemas import (
    AccessTokenResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from taskmanager.auth.tokens import TokenSigningError, create_access_token
from taskmanager.config import Settings
from taskmanager.database import get_db
from taskmanager.errors import TaskManagerError


router = APIRouter(prefix="/users", tags=["users"])

logger = logging.getLogger(__name__)


async def issue_token_pair(
    db: DBSession,
    user: User,
    response: Response,
    config: Settings,
) -> None:
    """Open a refresh session, mint an access token, set both headers."""
    refresh_token = await session_service.create_session(db, user, config)
    access_token = create_access_token(user.id, config)
    
    response.headers[REFRESH_TOKEN_HEADER] = refresh_token
    response.headers[ACCESS_TOKEN_HEADER] = access_token


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    response: Response,
    db: DBSession = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """
    Create an account and log it in.
    
    Raises:
        400: Validation failure or email already registered
    """
    try:
        user = credentials.register(db, body.email, body.password, config)
        await issue_token_pair(db, user, response, config)
    except (TaskManagerError, TokenSigningError) as e:
        logger.info("Registration rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)},
        )
    
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Authenticate user and create session",
)
async def login(
    body: LoginRequest,
    response: Response,
    db: DBSession = Depends(get_db),
    config: Settings = Depends(get_settings),
):
    """
    Authenticate with email and password.
    
    On success a new refresh session is appended to the user and a fresh
    token pair is returned in the response headers.
    
    Raises:
        400: Invalid credentials (same response for unknown email)
    """
    try:
        user = credentials.verify_credentials(db, body.email, body.password, config)
        await issue_token_pair(db, user, response, config)
    except (TaskManagerError, TokenSigningError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)},
        )
    
    logger.info("User %s logged in", user.id)
    return UserResponse.model_validate(user)


@router.get(
    "/me/access-token",
    response_model=AccessTokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Exchange a refresh session for a new access token",
)
async def get_access_token(
    response: Response,
    context: SessionContext = Depends(verify_session),
    config: Settings = Depends(get_settings),
):
    """
    Mint a new access token for the session's user.
    
    The refresh session stays valid; no new session is created.
    """
    try:
        access_token = create_access_token(context.user_id, config)
    except TokenSigningError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)},
        )
    
    response.headers[ACCESS_TOKEN_HEADER] = access_token
    return AccessTokenResponse(accessToken=access_token)
