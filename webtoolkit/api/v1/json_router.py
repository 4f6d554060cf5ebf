"""JSON decoding demonstration routes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from webtoolkit.dependencies import ToolkitDep
from webtoolkit.schemas.echo_schema import EchoPayload
from webtoolkit.schemas.response_schema import success_envelope

router = APIRouter(prefix="/api/v1/json", tags=["json"])


@router.post("/echo")
async def echo(request: Request, toolkit: ToolkitDep) -> JSONResponse:
    """Decode the body strictly and send it back inside the envelope."""
    payload = await toolkit.read_json(request, EchoPayload)
    return toolkit.write_json(
        200,
        success_envelope(payload, message="received"),
        headers={"X-Echo-Fields": [",".join(sorted(payload.model_fields_set)) or "-"]},
    )
