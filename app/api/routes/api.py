from fastapi import APIRouter

from app.api.routes.routes_auth import router as auth_router
from app.api.routes.routes_tasks import router as tasks_router
from app.api.routes.routes_comments import router as comments_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
api_router.include_router(comments_router, prefix="/comments", tags=["comments"])
