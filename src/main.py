# src/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from src.common.database.database import connect_to_db, close_db_connection
from src.common.config import settings
from src.common.exceptions import AppError
from src.router.routers import include_routers

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("aiosmtplib").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)


# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Elder Care Connect API ({settings.APP_ENV})")
    await connect_to_db()
    yield
    await close_db_connection()
    logger.info("Shutdown complete")

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="Elder Care Connect API",
    description="Marketplace API connecting families with vetted in-home caregivers",
    version="1.0.0",
    lifespan=lifespan
)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render service-layer errors as {"detail": message} with their mapped status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers from a separate file
include_routers(app)

# Root endpoint
@app.get("/", response_class=HTMLResponse)
async def root():
    html_content = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Elder Care Connect API</title>
    <style>
        body {
            font-family: system-ui, -apple-system, sans-serif;
            line-height: 1.6;
            background: #f7faf8;
            color: #1f2937;
            margin: 0;
        }

        .container {
            max-width: 760px;
            margin: 0 auto;
            padding: 3rem 2rem;
        }

        h1 {
            color: #15803d;
            margin-bottom: 0.25rem;
        }

        .card {
            background: #fff;
            border: 1px solid #e5e7eb;
            border-radius: 16px;
            padding: 1.5rem 2rem;
            margin-top: 1.5rem;
        }

        .endpoint {
            display: flex;
            gap: 1rem;
            padding: 0.5rem 0;
            border-bottom: 1px solid #f3f4f6;
        }

        .method {
            font-size: 0.75rem;
            font-weight: 600;
            width: 3.5rem;
            color: #2563eb;
        }

        .method.post { color: #16a34a; }
        .method.put { color: #d97706; }

        .path {
            font-family: 'SF Mono', 'Consolas', monospace;
        }

        .desc {
            margin-left: auto;
            color: #6b7280;
            font-size: 0.875rem;
        }

        a.button {
            display: inline-block;
            margin-top: 2rem;
            background: #15803d;
            color: #fff;
            padding: 0.75rem 1.75rem;
            border-radius: 10px;
            text-decoration: none;
            font-weight: 600;
        }
    </style>
</head>
<body>
    <div class="container">
        <h1>Elder Care Connect API</h1>
        <p>Book trusted caregivers for personal care, companionship and everyday help at home.</p>

        <div class="card">
            <div class="endpoint"><span class="method post">POST</span><span class="path">/auth/signup</span><span class="desc">Create a client or caregiver account</span></div>
            <div class="endpoint"><span class="method post">POST</span><span class="path">/auth/login</span><span class="desc">Sign in</span></div>
            <div class="endpoint"><span class="method">GET</span><span class="path">/services</span><span class="desc">Service catalog</span></div>
            <div class="endpoint"><span class="method">GET</span><span class="path">/client/caregivers</span><span class="desc">Find a caregiver</span></div>
            <div class="endpoint"><span class="method post">POST</span><span class="path">/client/book-service</span><span class="desc">Book a service</span></div>
            <div class="endpoint"><span class="method post">POST</span><span class="path">/caregiver/onboarding</span><span class="desc">Set up a caregiver profile</span></div>
            <div class="endpoint"><span class="method">GET</span><span class="path">/messages/conversations</span><span class="desc">Inbox</span></div>
        </div>

        <a href="/docs" class="button">View API Documentation</a>
    </div>
</body>
</html>
"""
    return html_content
