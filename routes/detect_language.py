"""
Language detection routes
"""
from fastapi import APIRouter, Request

from commands import DetectLanguageCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: DetectLanguageCommand) -> APIRouter:
    router = APIRouter(prefix="/detect-language", tags=["Language Detection"])

    @router.api_route("", methods=["GET", "POST"])
    async def detect_language(request: Request):
        params = await RequestParams.from_request(request)
        result = await run_command(command, params.text(), distribution=params.flag("distribution"))
        return json_response(result, params.flag("pretty"))

    @router.api_route("/per-token", methods=["GET", "POST"])
    async def detect_language_per_token(request: Request):
        params = await RequestParams.from_request(request)
        result = await run_command(command.per_token, params.text(), distribution=params.flag("distribution"))
        return json_response(result, params.flag("pretty"))

    return router
