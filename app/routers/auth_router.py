# /app/routers/auth_router.py

"""
This module defines the API for authentication-related actions.

It includes endpoints for:
- User registration (`/signup`), always as a student
- Exchanging email and password for an access token (`/signin`)
- Creating demonstrator accounts (`/demonstrators`), demonstrators only
- Signing out (`/signout`)
- Retrieving the current user's profile (`/me`)

Access tokens are signed JWTs; clients send them back as Bearer tokens and
`get_current_user` resolves them on every request.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from app.core.deps import get_current_demonstrator, get_current_user
from app.core.exceptions import BackendError
from app.models.page_model import MessageResponse
from app.models.user_model import DemonstratorCreate, SignUp, Token, User
from app.services import dashboard_service, user_service
from app.services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def sign_up(user_in: SignUp, db: DatabaseService = Depends(get_db_service)):
    """
    Handles new user registration. A ValueError from the service means the
    email is already registered and becomes a 400.
    """
    try:
        new_user = user_service.create_user(db=db, user=user_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return Token(access_token=user_service.issue_token(new_user), user=new_user)


@router.post("/signin", response_model=Token)
def sign_in(form_data: OAuth2PasswordRequestForm = Depends(), db: DatabaseService = Depends(get_db_service)):
    """Standard OAuth2 password form; the `username` field carries the email."""
    try:
        user = user_service.authenticate_user(db, email=form_data.username, password=form_data.password)
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=user_service.issue_token(user), user=user)


@router.post("/demonstrators", response_model=User, status_code=status.HTTP_201_CREATED)
def create_demonstrator(
    user_in: DemonstratorCreate,
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_demonstrator),
):
    try:
        return user_service.create_demonstrator(db=db, user=user_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/signout", response_model=MessageResponse)
def sign_out(current_user: User = Depends(get_current_user)):
    # Tokens are not stored server-side; the client drops it and goes back to the landing page.
    return MessageResponse(message="Signed out.", redirect_to=dashboard_service.LANDING_ROUTE)


@router.get("/me", response_model=User)
def read_current_user(current_user: User = Depends(get_current_user)):
    """Retrieves the profile of the currently authenticated user."""
    return current_user
