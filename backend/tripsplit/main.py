"""FastAPI app entrypoint."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripsplit.config import ALLOWED_ORIGINS, LOG_LEVEL
from tripsplit.database import engine, Base
from tripsplit.routers import trips, expenses, payers, settlements
from tripsplit.services.events import event_bus, ROSTER_CHANGED, TRIP_CHANGED
from tripsplit.services.roster_cache import roster_cache

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

Base.metadata.create_all(bind=engine)

event_bus.subscribe(ROSTER_CHANGED, roster_cache.invalidate)
event_bus.subscribe(TRIP_CHANGED, roster_cache.invalidate)

app = FastAPI(
    title="Trip Split API",
    description="Record who paid what on a trip and work out who owes whom.",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trips.router, prefix="/api")
app.include_router(expenses.router, prefix="/api")
app.include_router(payers.router, prefix="/api")
app.include_router(settlements.router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Trip Split API", "docs": "/docs"}
