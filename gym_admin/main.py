from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gym_admin.core.logging_config import configure_logging
from gym_admin.db.session import engine
from gym_admin.db.base import Base
from gym_admin import models  # noqa: F401  registers tables on Base.metadata

from gym_admin.api.routes import (
    auth,
    admin_clients,
    payment_plans,
    trash,
)

configure_logging()

app = FastAPI(title="Gym Admin Backend")

# ===============================
# CORS CONFIGURATION
# ===============================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Use specific origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===============================
# CREATE DATABASE TABLES
# ===============================
Base.metadata.create_all(bind=engine)

# ===============================
# INCLUDE ROUTERS
# ===============================
app.include_router(auth.router)
app.include_router(admin_clients.router)
app.include_router(payment_plans.router)
app.include_router(trash.router)

# ===============================
# ROOT ENDPOINT
# ===============================
@app.get("/")
def root():
    return {"status": "Backend running successfully"}
