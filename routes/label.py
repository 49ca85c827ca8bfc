"""
Tokens labeling routes
"""
from fastapi import APIRouter, Request

from commands import LabelCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: LabelCommand) -> APIRouter:
    router = APIRouter(prefix="/label", tags=["Label"])

    @router.post("")
    @router.post("/{domain}")
    @router.post("/{lang}/{domain}")
    async def label(request: Request):
        params = await RequestParams.from_request(request)
        result = await run_command(command, params.text(), lang=params.lang(), domain=params.domain())
        return json_response(result, params.flag("pretty"))

    return router
