import logging
from fastapi import APIRouter, Depends, HTTPException, status, Header, Query
from sqlalchemy.orm import Session
from app.core.database import get_db, commit_or_rollback, utcnow
from app.core.security import (
    as_utc,
    create_access_token,
    generate_signin_token,
    get_token_hash,
    verify_signin_token,
    verify_token,
)
from app.models.user import User
from app.models.token import Token
from app.models.verification_token import VerificationToken
from app.schemas.auth import (
    SignInRequest,
    SignInResponse,
    TokenResponse,
    LogoutResponse,
)
from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode
from app.core.config import settings
from app.core.mailer import send_signin_email

logger = logging.getLogger(__name__)

router = APIRouter()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise _unauthorized("Authorization header required")

    try:
        scheme, token = authorization.split()
    except ValueError:
        raise _unauthorized("Invalid authorization header format")
    if scheme.lower() != "bearer":
        raise _unauthorized("Invalid authentication scheme")
    return token


def get_current_user(
    authorization: Optional[str] = Header(None), db: Session = Depends(get_db)
):
    token = _bearer_token(authorization)

    payload, error = verify_token(token)
    if error == "expired":
        raise _unauthorized("Token has expired")
    elif error == "invalid":
        raise _unauthorized("Could not validate credentials")

    user_id: str = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Token payload invalid")

    session_record = db.query(Token).filter(Token.token == token).first()
    if session_record is None or as_utc(session_record.expiry_date) < utcnow():
        raise _unauthorized("Token has been invalidated or expired")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


@router.post("/signin", response_model=SignInResponse)
def request_signin_link(body: SignInRequest, db: Session = Depends(get_db)):
    email = body.email.lower()
    token = generate_signin_token()

    # A new link replaces any pending one for the same address
    db.query(VerificationToken).filter(VerificationToken.identifier == email).delete()
    db.add(
        VerificationToken(
            identifier=email,
            token_hash=get_token_hash(token),
            expires=utcnow() + timedelta(hours=settings.signin_token_expire_hours),
        )
    )
    commit_or_rollback(db)

    query = urlencode({"email": email, "token": token})
    send_signin_email(email, f"{settings.public_url}/api/v1/auth/callback?{query}")
    logger.info(f"Sign-in link requested for {email}")

    return {"message": "Check your email for a sign-in link"}


@router.get("/callback", response_model=TokenResponse)
def complete_signin(
    email: str = Query(...),
    token: str = Query(...),
    db: Session = Depends(get_db),
):
    email = email.lower()
    pending = (
        db.query(VerificationToken)
        .filter(VerificationToken.identifier == email)
        .all()
    )
    match = next(
        (record for record in pending if verify_signin_token(token, record.token_hash)),
        None,
    )
    if match is None or as_utc(match.expires) < utcnow():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired sign-in link",
        )

    # Links are single use
    db.delete(match)

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email, email_verified=utcnow())
        db.add(user)
        db.flush()
        logger.info(f"Created user {user.id} on first sign-in")
    elif user.email_verified is None:
        user.email_verified = utcnow()

    expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(data={"sub": user.id}, expires_delta=expires_delta)

    # Store token in database for logout tracking
    db.add(
        Token(
            token=access_token,
            expiry_date=utcnow() + expires_delta,
            user_id=user.id,
        )
    )
    commit_or_rollback(db)

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout", response_model=LogoutResponse)
def logout(
    current_user: User = Depends(get_current_user),
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    token = _bearer_token(authorization)

    # Find and delete the token from database to invalidate it
    token_record = db.query(Token).filter(Token.token == token).first()
    if token_record:
        db.delete(token_record)
        commit_or_rollback(db)

    logger.info(f"User {current_user.id} signed out")
    return {"message": "Successfully logged out"}
