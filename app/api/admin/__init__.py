from fastapi import APIRouter

from app.api.admin import projects, users

router = APIRouter()

router.include_router(users.router)
router.include_router(projects.router)
