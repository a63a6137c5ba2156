"""Contact form router.

POST /api/contact accepts the site's quote request form. The handler lives on
`app.state` so tests can build an app with their own configuration and fakes.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from subsonic_api.models.responses import ContactResult, ErrorResult
from subsonic_api.services.contact_service import ContactRequestHandler

router = APIRouter(prefix="/api", tags=["contact"])


def get_contact_handler(request: Request) -> ContactRequestHandler:
    return request.app.state.contact_handler


@router.post(
    "/contact",
    response_model=ContactResult,
    responses={400: {"model": ErrorResult}, 500: {"model": ErrorResult}},
)
async def submit_contact(request: Request):
    # Body read raw: malformed JSON is a 500, missing fields a 400
    body = await request.body()
    outcome = await get_contact_handler(request).handle(body)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
