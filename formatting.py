"""
Response formatting: JSON (compact or pretty) and the tabular CoNLL format
"""
import json
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi.responses import PlainTextResponse, Response

from exceptions import InvalidParameter
from language import Language
from nlp_models import ParsedSentence

JSON_MEDIA_TYPE = "application/json"


class ResponseFormat(str, Enum):
    """Encodings of a parse response"""
    JSON = "json"
    CONLL = "conll"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ResponseFormat":
        if not value:
            return cls.JSON
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            raise InvalidParameter("format", f"'{value}' is not one of {allowed}")


def language_to_dict(language: Language,
                     distribution: Optional[Sequence[Tuple[Language, float]]] = None) -> Dict[str, Any]:
    """A language with its optional scores distribution, omitted when missing"""
    result: Dict[str, Any] = language.to_dict()
    if distribution is not None:
        result["distribution"] = [
            {"id": lang.iso_code, "name": lang.name, "score": score} for lang, score in distribution
        ]
    return result


def render_json(value: Any, pretty: bool = False) -> str:
    """Serialize a value, pretty-printed ones end with a newline"""
    if pretty:
        return json.dumps(value, ensure_ascii=False, indent=2) + "\n"
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def json_response(value: Any, pretty: bool = False) -> Response:
    return Response(content=render_json(value, pretty), media_type=JSON_MEDIA_TYPE)


def to_conll(sentences: List[ParsedSentence]) -> str:
    """
    Write parsed sentences in CoNLL format

    One line per token with the tab-separated columns: id, form, lemma, POS,
    features, head, dependency, multi-word. Ids and heads are 1-based
    positions in the sentence, the head of the root is 0.
    """
    blocks = []
    for sentence in sentences:
        positions = {token.id: i + 1 for i, token in enumerate(sentence.tokens)}
        lines = []
        for i, token in enumerate(sentence.tokens):
            head = positions.get(token.governor, 0) if token.governor is not None else 0
            lines.append("\t".join([
                str(i + 1),
                token.form if token.form is not None else "_",
                "_",
                "|".join(token.pos) or "_",
                "_",
                str(head),
                "|".join(token.dependencies) or "_",
                "_",
            ]))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def conll_response(sentences: List[ParsedSentence]) -> Response:
    return PlainTextResponse(content=to_conll(sentences))
