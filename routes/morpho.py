"""
Morphological analysis routes
"""
from fastapi import APIRouter, Request

from commands import MorphoCommand
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: MorphoCommand) -> APIRouter:
    router = APIRouter(prefix="/morpho", tags=["Morphology"])

    @router.post("/numbers")
    @router.post("/numbers/{lang}")
    async def find_numbers(request: Request):
        """Find the numerical expressions in a text"""
        params = await RequestParams.from_request(request)
        result = await run_command(command.numbers, params.text(), lang=params.lang())
        return json_response(result, params.flag("pretty"))

    @router.post("/datetimes")
    @router.post("/datetimes/{lang}")
    async def find_datetimes(request: Request):
        """Find the date-time expressions in a text"""
        params = await RequestParams.from_request(request)
        result = await run_command(command.datetimes, params.text(), lang=params.lang())
        return json_response(result, params.flag("pretty"))

    return router
