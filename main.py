import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from courtwatch import DEFAULT_SPORT, SPORTS, AvailabilityService, Sport, UnknownSportError
from courtwatch import config
from courtwatch.browser import BrowserSession
from courtwatch.debug import inspect_date_picker

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


def setup_logging(level: str = config.LOG_LEVEL):
    """Configures logging to stderr with local time."""
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s]: %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    formatter.converter = time.localtime
    handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=[handler])


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs under `uvicorn main:app` as well as `python main.py`
    setup_logging()
    yield


app = FastAPI(
    title="Court Availability",
    description="Weekly court availability from the membership portal",
    lifespan=lifespan,
)
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

# Shared service; each request still runs its own browser session
service = AvailabilityService()


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.get("/")
async def home(request: Request, sport: str = Query(default=None)):
    selected_sport = sport if sport in SPORTS else DEFAULT_SPORT
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "sport_options": [
                {"value": slug, "label": sport_config.name, "is_selected": slug == selected_sport}
                for slug, sport_config in SPORTS.items()
            ],
            "selected_sport": selected_sport,
            "reservation_base_url": config.BASE_URL,
        },
    )


@app.get("/availability")
async def availability(sport: str = Query(default=DEFAULT_SPORT)):
    """Scrape the portal for every court of a sport and return the weekly view."""
    try:
        report = await service.get_availability(sport)
    except UnknownSportError as e:
        return error_response(str(e), 400)
    except Exception as e:
        logger.exception(f"ERROR: {e}")
        return error_response(str(e) or "Unknown error", 500)
    return report.to_dict()


@app.get("/debug")
async def debug():
    """Date-picker introspection of the first tennis court's page."""
    court = SPORTS[Sport.TENNIS].courts[0]
    try:
        async with BrowserSession() as session:
            return await inspect_date_picker(session, court)
    except Exception as e:
        logger.exception(f"Debug inspection failed: {e}")
        return error_response(str(e) or "Unknown error", 500)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
