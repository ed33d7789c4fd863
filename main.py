import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from schemas.request_schema import PanchangQuery, PanchangRequest
from services import config
from services.astrology_client import AstrologyClient
from services.panchang_service import fallback_for_date, generate_panchang
from services.timings import calculate_timings

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("panchang")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.astrology_client = AstrologyClient()
    yield
    app.state.astrology_client.close()


app = FastAPI(title="Panchang Aggregator", lifespan=lifespan)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}" for err in exc.errors()
    )
    return error_response(400, f"Invalid request: {problems}")


@app.get("/health")
def health():
    return {"ok": True, "service": "panchang-aggregator"}


@app.post("/api/panchang")
async def post_panchang(body: PanchangRequest, request: Request):
    missing = body.missing_fields()
    if missing:
        return error_response(400, "Missing required fields: year, month, date, latitude, longitude")
    try:
        client = getattr(request.app.state, "astrology_client", None)
        data = await generate_panchang(body, client=client)
        return {"success": True, "data": data.model_dump(mode="json"), "source": "api"}
    except Exception:
        logger.exception("Panchang API error")
        return error_response(500, "Failed to fetch Panchang data")


@app.get("/api/panchang")
def get_panchang(query: Annotated[PanchangQuery, Query()]):
    if query.missing_fields():
        return error_response(400, "Missing required parameters: date, latitude, longitude")
    try:
        data = fallback_for_date(query.date, query.latitude, query.longitude)
        return {"success": True, "data": data.model_dump(mode="json")}
    except Exception:
        logger.exception("Panchang GET error")
        return error_response(500, "Failed to fetch Panchang data")


@app.get("/api/panchang/calculations")
def get_panchang_calculations(query: Annotated[PanchangQuery, Query()]):
    if query.missing_fields():
        return error_response(400, "Missing required parameters: date, latitude, longitude")
    try:
        data = fallback_for_date(query.date, query.latitude, query.longitude)
        calculations = calculate_timings(data, on=query.date)
        return {
            "success": True,
            "data": {**data.model_dump(mode="json"), "calculations": calculations.model_dump(mode="json")},
        }
    except Exception:
        logger.exception("Panchang calculations error")
        return error_response(500, "Failed to calculate Panchang timings")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
