"""
Form routes: page rendering and form echo endpoints
"""

import logging
from pathlib import Path
from fastapi import Request
from fastapi.templating import Jinja2Templates

from api.routing import Route
from models.forms import FormAcknowledgement
from utils.error_handling import ErrorHandlingConfig

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

PAGE_CONTEXT = {
    "website": "beego.me",
    "email": "astaxie@gmail.com",
}


async def read_form_fields(request: Request, *names: str) -> dict:
    """Read the named form fields; missing fields read as empty strings"""
    form = await request.form()
    return {name: str(form.get(name, "")) for name in names}


async def show_index(request: Request):
    """Render the index page"""
    return templates.TemplateResponse(request, "index.html", PAGE_CONTEXT)


async def submit_index(request: Request):
    """Log the submitted name fields and render the index page"""
    fields = await read_form_fields(request, "firstname", "lastname", "username")
    logger.debug(f"Form submitted to {request.url.path}: {fields}")
    return templates.TemplateResponse(request, "index.html", PAGE_CONTEXT)


async def submit_post(request: Request) -> FormAcknowledgement:
    """Log the submitted name fields and acknowledge"""
    fields = await read_form_fields(request, "firstname", "lastname", "username")
    logger.debug(f"Form submitted to {request.url.path}: {fields}")
    return FormAcknowledgement()


async def submit_ajax(request: Request) -> FormAcknowledgement:
    """Log the submitted credentials (password redacted) and acknowledge"""
    fields = await read_form_fields(request, "username", "password")
    logger.debug(f"Ajax form submitted: {ErrorHandlingConfig.sanitize_data(fields)}")
    return FormAcknowledgement()


ROUTES = [
    Route("/get", ["GET"], show_index),
    Route("/get", ["POST"], submit_index),
    Route("/post", ["GET"], show_index),
    Route("/post", ["POST"], submit_post, {"response_model": FormAcknowledgement}),
    Route("/ajax", ["GET"], show_index),
    Route("/ajax", ["POST"], submit_ajax, {"response_model": FormAcknowledgement}),
]
