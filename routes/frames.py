"""
Frames extraction routes
"""
from fastapi import APIRouter, Request

from commands import ExtractFramesCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: ExtractFramesCommand) -> APIRouter:
    router = APIRouter(prefix="/frames", tags=["Frames"])

    @router.api_route("", methods=["GET", "POST"])
    @router.api_route("/{domain}", methods=["GET", "POST"])
    async def extract_frames(request: Request):
        params = await RequestParams.from_request(request)
        result = await run_command(
            command,
            params.text(),
            lang=params.lang(),
            domain=params.domain(),
            distribution=params.flag("distribution")
        )
        return json_response(result, params.flag("pretty"))

    return router
