from fastapi import APIRouter

from src.taskflow.api.v1 import auth, goals, projects, tasks, time_entries, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(time_entries.router)
api_router.include_router(goals.router)
