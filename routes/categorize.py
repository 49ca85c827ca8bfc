"""
Categorize routes
"""
from fastapi import APIRouter, Request

from commands import CategorizeCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: CategorizeCommand) -> APIRouter:
    router = APIRouter(prefix="/categorize", tags=["Categorize"])

    @router.api_route("", methods=["GET", "POST"])
    @router.api_route("/{domain}", methods=["GET", "POST"])
    @router.api_route("/{lang}/{domain}", methods=["GET", "POST"])
    async def categorize(request: Request):
        """Classify the sentences of a text, for all the domains if none is given"""
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
