import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from smart_campus.config import LOG_LEVEL, SEED_SAMPLE_DATA
from smart_campus.campus import CampusSystem
from smart_campus.db import SessionLocal, init_database
from smart_campus.routers import bookings, classrooms, resources, students
from smart_campus.utils.persistence import CollectionStore

logging.basicConfig(level=LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    "lifespan for loading the campus directories and flushing them on exit"
    init_database()
    campus = CampusSystem(CollectionStore(SessionLocal))
    campus.startup(seed=SEED_SAMPLE_DATA)
    app.state.campus = campus
    yield
    campus.shutdown()


app = FastAPI(
    lifespan=lifespan,
    title="Smart Campus",
    description="Students, classroom bookings and checkable resources for one campus.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


app.include_router(classrooms.router)
app.include_router(bookings.router)
app.include_router(students.router)
app.include_router(resources.router)
