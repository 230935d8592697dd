from fastapi import APIRouter
from app.api.v1.endpoints import users, quizzes, attempts

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Identity and per-user listings at /users
api_router.include_router(
    users.router,
    prefix="/users"
)

# Authoring, lookup by code and starting attempts at /quizzes
api_router.include_router(
    quizzes.router,
    prefix="/quizzes"
)

# Answering, completion and results at /attempts
api_router.include_router(
    attempts.router,
    prefix="/attempts"
)
