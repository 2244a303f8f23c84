# safetrade/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safetrade.api import auth, geocoding, moderation, products, users
from safetrade.api.errors import install_error_handlers
from safetrade.config import settings
from safetrade.database import Base, engine
from safetrade import models  # noqa: F401 - register all tables on Base

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="SafeTrade API")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# API routers
app.include_router(auth.router)        # /auth/*
app.include_router(users.router)       # /users/*
app.include_router(products.router)    # /products/*
app.include_router(moderation.router)  # /moderation/*
app.include_router(geocoding.router)   # /nominatim/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "SafeTrade API is running",
        "version": "1.0.0",
    }
