# monthly_reports/routers/users.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_reports.models.user import User
from monthly_reports.schemas.user import UserCreate, UserLogin, UserResponse, ProfileUpdate, Token
from monthly_reports.database import get_db
from monthly_reports.utils.password import hash_password, verify_password
from monthly_reports.core.security import create_access_token
from monthly_reports.core.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.email == user_in.email))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Email already registered")

    try:
        hashed_pw = hash_password(user_in.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    user = User(
        name=user_in.name,
        email=user_in.email,
        title=user_in.title,
        educational_institution=user_in.educational_institution,
        class_name=user_in.class_name,
        address=user_in.address,
        phone_number=user_in.phone_number,
        hashed_password=hashed_pw,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Same email registered concurrently
        await db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    await db.refresh(user)

    logger.info("Registered user %s", user.id)
    return Token(token=create_access_token({"sub": str(user.id)}), user=user)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.email == credentials.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.warning("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(token=create_access_token({"sub": str(user.id)}), user=user)


@router.get("/profile", response_model=UserResponse)
async def read_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    profile_in: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    for field, value in profile_in.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(current_user, field, value)

    db.add(current_user)
    await db.commit()
    await db.refresh(current_user)
    return current_user
