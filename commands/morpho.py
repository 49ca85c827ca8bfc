"""
Morphological analysis command: numerical and date-time expressions
"""
from typing import Any, Dict, List, Optional

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from metrics import observe_model
from nlp_models import Expression, Sentence


class MorphoCommand(Command):

    name = "morpho"

    def numbers(self, text: str, lang: Optional[str] = None) -> List[Dict[str, Any]]:
        self.logger.debug(f"Searching for numerical expressions in the text `{cut_text(text)}`")
        return self._find(text, lang, "find_numbers")

    def datetimes(self, text: str, lang: Optional[str] = None) -> List[Dict[str, Any]]:
        self.logger.debug(f"Searching for date-time expressions in the text `{cut_text(text)}`")
        return self._find(text, lang, "find_datetimes")

    def _find(self, text: str, lang: Optional[str], method: str) -> List[Dict[str, Any]]:
        check_text(text)

        language = self.resolver.language(text, lang, CapabilityType.MORPHO_ANALYZER)
        analyzer = self.registry[CapabilityType.MORPHO_ANALYZER].get(language.iso_code)

        results = []
        for sentence in self.tokenize(text, language):
            with observe_model(CapabilityType.MORPHO_ANALYZER.value):
                expressions = getattr(analyzer, method)(sentence)
            results.extend(self._to_dict(expression, sentence) for expression in expressions)

        return results

    @staticmethod
    def _to_dict(expression: Expression, sentence: Sentence) -> Dict[str, Any]:
        return {
            "type": expression.type,
            "value": expression.value,
            "startToken": expression.start_token,
            "endToken": expression.end_token,
            "startChar": sentence.tokens[expression.start_token].start,
            "endChar": sentence.tokens[expression.end_token].end,
        }
