from fastapi import APIRouter
from .endpoints import chat, drugs, interactions, system

api_router = APIRouter()

api_router.include_router(drugs.router, tags=["Drugs"])
api_router.include_router(interactions.router, tags=["Interactions"])
api_router.include_router(chat.router, tags=["Drug Chat"])
api_router.include_router(system.router, tags=["System"])
