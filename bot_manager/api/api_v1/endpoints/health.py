from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from datetime import datetime

from bot_manager.core.config import settings
from bot_manager.core.database import get_db

router = APIRouter()


@router.get("/")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": settings.app_name
    }


@router.get("/database")
async def database_health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "message": "Database connection OK"
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "message": f"Database connection error: {str(e)}"
        }
