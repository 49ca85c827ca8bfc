"""
Locations routes
"""
from fastapi import APIRouter, Request

from commands import FindLocationsCommand, parse_candidates
from dispatch import RequestParams, run_command
from formatting import json_response


def build_router(command: FindLocationsCommand) -> APIRouter:
    router = APIRouter(prefix="/locations", tags=["Locations"])

    @router.post("")
    @router.post("/{lang}")
    async def find_locations(request: Request):
        """Find the locations mentioned in a text, deriving the candidates if not given"""
        params = await RequestParams.from_request(request)
        text = params.text()
        raw_candidates = params.get("candidates")
        candidates = parse_candidates(raw_candidates) if raw_candidates is not None else None

        result = await run_command(command, text, lang=params.lang(), candidates=candidates)
        return json_response(result, params.flag("pretty"))

    return router
