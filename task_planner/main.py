import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from task_planner import config
from task_planner.api.plan.plan_controller import router as plan_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(
    title="Smart Task Planner API",
    version="1.0.0",
    description="Breaks a goal down into tasks with an LLM and stores the plan",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(plan_router)
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
