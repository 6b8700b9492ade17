from fastapi import APIRouter

from api.routes.system import router as system_router
from modules.observer.controllers import router as observer_router

api_router = APIRouter()

api_router.include_router(system_router)
api_router.include_router(observer_router)
