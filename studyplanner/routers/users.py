from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studyplanner import store
from studyplanner.database import get_db
from studyplanner.schemas.user import UserCreate, UserOut

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    user_id = store.create_user(db, user.username, user.email)
    return {"id": user_id, "message": "User created successfully"}


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = store.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
