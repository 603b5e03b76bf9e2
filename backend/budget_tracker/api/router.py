"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from budget_tracker.api.routes import projects, activities, fx_rates, budget

api_router = APIRouter()

# Include all route modules
api_router.include_router(projects.router)
api_router.include_router(activities.router)
api_router.include_router(fx_rates.router)
api_router.include_router(budget.router)
