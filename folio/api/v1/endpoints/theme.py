# folio/api/v1/endpoints/theme.py
from fastapi import APIRouter, Request, Response

from folio.core.services.theme_service import THEME_COOKIE, parse_theme, toggle_theme
from folio.models.schemas import ThemeResponse

router = APIRouter()

ONE_YEAR = 60 * 60 * 24 * 365


@router.get("/", response_model=ThemeResponse)
def read_theme(request: Request):
    return ThemeResponse(theme=parse_theme(request.cookies.get(THEME_COOKIE)).value)


@router.post("/toggle", response_model=ThemeResponse)
def toggle(request: Request, response: Response):
    """Flip between light and dark and persist the choice in the theme cookie."""
    new_theme = toggle_theme(parse_theme(request.cookies.get(THEME_COOKIE)))
    response.set_cookie(THEME_COOKIE, new_theme.value, max_age=ONE_YEAR, samesite="lax")
    return ThemeResponse(theme=new_theme.value)
