from fastapi import APIRouter

from app.api.routers import customers, products, quotations, roles, teams, users

api_router = APIRouter()

api_router.include_router(roles.router)
api_router.include_router(users.router)
api_router.include_router(teams.router)
api_router.include_router(customers.router)
api_router.include_router(products.router)
api_router.include_router(quotations.router)
