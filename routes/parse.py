"""
Parse routes
"""
from fastapi import APIRouter, Request

from commands import ParseCommand
from dispatch import RequestParams, run_command
from formatting import ResponseFormat, conll_response, json_response


def build_router(command: ParseCommand) -> APIRouter:
    router = APIRouter(prefix="/parse", tags=["Parse"])

    @router.api_route("", methods=["GET", "POST"])
    @router.api_route("/{lang}", methods=["GET", "POST"])
    async def parse(request: Request):
        """Parse a text, in JSON or CoNLL format"""
        params = await RequestParams.from_request(request)
        text = params.text()
        response_format = ResponseFormat.parse(params.get_str("format"))

        result = await run_command(command, text, lang=params.lang(), distribution=params.flag("distribution"))

        if response_format == ResponseFormat.CONLL:
            return conll_response(result.sentences)
        return json_response(result.to_dict(), params.flag("pretty"))

    return router
