"""
Summarize routes
"""
from fastapi import APIRouter, Request

from commands import SummarizeCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: SummarizeCommand) -> APIRouter:
    router = APIRouter(prefix="/summarize", tags=["Summarize"])

    @router.post("")
    @router.post("/{lang}")
    async def summarize(request: Request):
        params = await RequestParams.from_request(request)
        result = await run_command(command, params.text(), lang=params.lang())
        return json_response(result, params.flag("pretty"))

    return router
