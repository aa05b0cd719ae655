from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from models import UserCreate, UserLogin
from services import ok
from services import accounts

router = APIRouter(prefix="/auth", tags=["Auth"])

@router.post("/register")
async def register(data: UserCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    result = await accounts.register(db, data)
    return ok("Registration successful", result, status_code=201)

@router.post("/login")
async def login(data: UserLogin, db: AsyncIOMotorDatabase = Depends(get_db)):
    result = await accounts.login(db, data.email, data.password)
    return ok("Login successful", result)
