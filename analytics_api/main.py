from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from .config import settings
from .routers import pageviews, reports, sessions
from .middleware import logging_middleware

# Setup basic logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
)

app = FastAPI(title=settings.PROJECT_NAME)

# The dashboard frontend may be served from another origin; restrict with
# CORS_ORIGINS in production.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(logging_middleware)


app.include_router(pageviews.router, prefix="/api/websites", tags=["Stats"])
app.include_router(reports.router, prefix="/api/websites", tags=["Reports"])
app.include_router(sessions.router, prefix="/api/websites", tags=["Sessions"])


@app.get("/")
def root():
    return {"message": f"{settings.PROJECT_NAME} running"}
