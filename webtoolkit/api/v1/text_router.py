"""Slug and random string routes."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from webtoolkit.dependencies import ToolkitDep
from webtoolkit.schemas.response_schema import success_envelope
from webtoolkit.schemas.text_schema import RandomStringResponse, SlugRequest, SlugResponse

router = APIRouter(prefix="/api/v1/text", tags=["text"])


@router.post("/slug")
async def create_slug(request: Request, toolkit: ToolkitDep) -> JSONResponse:
    body = await toolkit.read_json(request, SlugRequest)
    slug = toolkit.slugify(body.text)
    return toolkit.write_json(200, success_envelope(SlugResponse(slug=slug)))


@router.get("/random")
async def random_value(
    toolkit: ToolkitDep, length: int = Query(default=32, ge=1, le=1024)
) -> JSONResponse:
    value = toolkit.random_string(length)
    return toolkit.write_json(
        200, success_envelope(RandomStringResponse(value=value, length=length))
    )
