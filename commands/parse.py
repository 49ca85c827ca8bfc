"""
Parse command
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from formatting import language_to_dict
from language import Language
from nlp_models import ParsedSentence


@dataclass
class ParseResult:
    """Parsed sentences with the language they have been parsed with"""
    language: Language
    sentences: List[ParsedSentence]
    distribution: Optional[list] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": language_to_dict(self.language, self.distribution),
            "sentences": [sentence.to_dict() for sentence in self.sentences]
        }


class ParseCommand(Command):
    """Tokenize a text and parse its sentences"""

    name = "parse"

    def __call__(self, text: str, lang: Optional[str] = None, distribution: bool = False) -> ParseResult:
        check_text(text)
        self.logger.debug(f"Parsing text `{cut_text(text)}`")

        resolution = self.resolver.resolve_language(
            text, lang, [CapabilityType.TOKENIZER, CapabilityType.PARSER], with_distribution=distribution
        )
        language = resolution.unwrap()

        return ParseResult(
            language=language,
            sentences=self.parse(text, language),
            distribution=resolution.distribution
        )
