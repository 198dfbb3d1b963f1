import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm

from inventory_api.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from inventory_api.database import db
from inventory_api.errors import DuplicateEntry
from inventory_api.models.user import LoginRequest, Role, TokenResponse, User, UserCreate, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token.",
    headers={"WWW-Authenticate": "Bearer"},
)


def issue_token(user: User) -> TokenResponse:
    token = create_access_token({"sub": user.id, "role": Role(user.role).value})
    return TokenResponse(access_token=token, user=UserPublic.from_user(user))


async def authenticate(email: str, password: str) -> Optional[User]:
    user = await db.users.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


async def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        raise CREDENTIALS_EXCEPTION
    user = await db.users.get(payload["sub"])
    if not user:
        raise CREDENTIALS_EXCEPTION
    return user


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.active:
        raise HTTPException(status_code=401, detail="User is inactive.")
    return current_user


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(payload: UserCreate):
    if await db.users.get_by_email(payload.email, include_inactive=True):
        raise DuplicateEntry("User already exists.")

    # Only the very first account may pick its role; later sign-ups are staff
    role = payload.role if await db.users.count(include_inactive=True) == 0 else Role.STAFF
    user = User(
        name=payload.name.strip(),
        email=payload.email,
        password_hash=get_password_hash(payload.password),
        role=role,
    )
    await db.users.create(user)
    logger.info(f"Registered user {user.email} ({user.role.value})")
    return issue_token(user)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest):
    user = await authenticate(payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    return issue_token(user)


@router.post("/token", response_model=TokenResponse)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends()):
    """OAuth2 password flow; the username field carries the email."""
    user = await authenticate(form_data.username, form_data.password)
    if not user:
        raise CREDENTIALS_EXCEPTION
    return issue_token(user)


@router.get("/me", response_model=UserPublic)
async def read_me(current_user: User = Depends(get_current_active_user)):
    return UserPublic.from_user(current_user)
