"""
Tokenize routes
"""
from fastapi import APIRouter, Request

from commands import TokenizeCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: TokenizeCommand) -> APIRouter:
    router = APIRouter(prefix="/tokenize", tags=["Tokenize"])

    @router.api_route("", methods=["GET", "POST"])
    @router.api_route("/{lang}", methods=["GET", "POST"])
    async def tokenize(request: Request):
        """Split a text into sentences and tokens"""
        params = await RequestParams.from_request(request)
        result = await run_command(command, params.text(), lang=params.lang())
        return json_response(result, params.flag("pretty"))

    return router
