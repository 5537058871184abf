import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chronos import config
from chronos.routers import (
    archives,
    constraints,
    timetables,
    workspaces
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Chronos Timetable",
    description="API for building weekly class timetables: quick drafts, AI-optimized generation, editing, archives and image export.",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(constraints.router)
app.include_router(timetables.router)
app.include_router(workspaces.router)
app.include_router(archives.router)

@app.get("/")
def root():
    return {"message": "Welcome to Chronos Timetable API"}
