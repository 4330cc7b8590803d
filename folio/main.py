# folio/main.py
import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from folio.api.v1.endpoints import proxy
from folio.api.v1.router import api_router
from folio.core.config import get_settings, settings
from folio.core.errors import FolioError
from folio.core.services.reference_service import ReferenceText, load_reference_text
from folio.core.services.reveal_service import RevealRegistry
from folio.core.services.theme_service import THEME_COOKIE, parse_theme, theme_icon

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
templates = Jinja2Templates(directory=os.path.join(PACKAGE_DIR, "templates"))


async def load_reference_in_background(app: FastAPI):
    """Fill app.state.reference without holding up startup."""
    reference = await asyncio.to_thread(load_reference_text, get_settings())
    app.state.reference = reference
    if reference.is_empty:
        logger.warning("Reference text is empty; searches will fail until it is available.")
    else:
        logger.info("Reference text loaded from %s", reference.source)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.reference = ReferenceText()
    app.state.reveal_registry = RevealRegistry()
    task = asyncio.create_task(load_reference_in_background(app))
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    title="Folio | Portfolio & CV Search",
    description="A personal portfolio with a search box that answers questions about the CV.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=os.path.join(PACKAGE_DIR, "static")), name="static")

app.include_router(api_router, prefix="/api/v1")
# Same handler at the path the hosted page has always posted to.
app.include_router(proxy.router, prefix="/.netlify/functions/search", include_in_schema=False)


@app.exception_handler(FolioError)
async def folio_error_handler(request: Request, exc: FolioError):
    logger.error("Search error: %s", exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.user_message()})


@app.get("/", response_class=HTMLResponse, tags=["Page"])
def serve_portfolio(request: Request):
    """Serve the portfolio page with the visitor's saved theme applied."""
    current = get_settings()
    theme = parse_theme(request.cookies.get(THEME_COOKIE))
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "theme": theme.value,
            "theme_icon": theme_icon(theme),
            "owner_name": current.owner_name,
            "skills": current.skills,
            "allow_client_credential": current.allow_client_credential,
        },
    )


@app.get("/health", tags=["Page"])
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
