import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from db import init_db
from routes import accounts, balance, credit_cards, forecast, kpis, simulation, timeline, transactions
from utils.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

app = FastAPI(title="Budget Forecast API")


@app.on_event("startup")
def startup():
    init_db()


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(transactions.router)
app.include_router(accounts.router)
app.include_router(credit_cards.router)
app.include_router(balance.router)
app.include_router(simulation.router)
app.include_router(kpis.router)
app.include_router(timeline.router)
app.include_router(forecast.router)
