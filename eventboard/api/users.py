from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventboard.core.database import get_db
from eventboard.repositories.user_repository import UserRepository
from eventboard.schemas.user import UserCreate, UserResponse

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def get_all(db: AsyncSession = Depends(get_db)):
    """Get a list of all users"""
    return await UserRepository(db).list_all()


@router.get("/{username}", response_model=UserResponse)
async def get_by_username(username: str, db: AsyncSession = Depends(get_db)):
    """Get a user by username"""
    return await UserRepository(db).get_by_username(username)


@router.post("", status_code=status.HTTP_201_CREATED)
async def post(user: UserCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a new user.

    Responds 409 if the username is taken (compared case-insensitively).
    """
    await UserRepository(db).create(user.username)
    return Response(status_code=status.HTTP_201_CREATED)
