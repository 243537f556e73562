# src/router/routers.py

from fastapi import FastAPI
from src.auth.auth_controller import router as auth_router
from src.modules.user.user_controller import router as user_router
from src.modules.catalog.catalog_controller import router as catalog_router
from src.modules.caregivers.caregivers_controller import router as caregivers_router
from src.modules.caregivers.caregivers_controller import client_router as caregiver_search_router
from src.modules.bookings.bookings_controller import router as bookings_router
from src.modules.bookings.bookings_controller import wizard_router as book_service_router
from src.modules.onboarding.onboarding_controller import router as onboarding_router
from src.modules.dashboard.dashboard_controller import client_router as client_dashboard_router
from src.modules.dashboard.dashboard_controller import caregiver_router as caregiver_dashboard_router
from src.modules.messages.messages_controller import router as messages_router

def include_routers(app: FastAPI) -> None:
    """Include all API routers in the FastAPI application."""
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(catalog_router)
    app.include_router(caregivers_router)
    app.include_router(caregiver_search_router)
    app.include_router(bookings_router)
    app.include_router(book_service_router)
    app.include_router(onboarding_router)
    app.include_router(client_dashboard_router)
    app.include_router(caregiver_dashboard_router)
    app.include_router(messages_router)
