"""
Compare routes
"""
from fastapi import APIRouter, Request

from commands import CompareCommand, parse_comparing
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: CompareCommand) -> APIRouter:
    router = APIRouter(prefix="/compare", tags=["Compare"])

    @router.post("")
    @router.post("/{lang}")
    async def compare(request: Request):
        """Score the similarity of a text with each of the comparing texts"""
        params = await RequestParams.from_request(request)
        values = params.require("text", "comparing")
        comparing = parse_comparing(values["comparing"])

        result = await run_command(command, params.text(), comparing, lang=params.lang())
        return json_response(result, params.flag("pretty"))

    return router
