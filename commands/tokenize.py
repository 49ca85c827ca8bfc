"""
Tokenize command
"""
from typing import Any, Dict, List, Optional

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text


class TokenizeCommand(Command):
    """Split a text into sentences and tokens"""

    name = "tokenize"

    def __call__(self, text: str, lang: Optional[str] = None) -> List[Dict[str, Any]]:
        check_text(text)
        self.logger.debug(f"Tokenizing text `{cut_text(text)}`")

        language = self.resolver.language(text, lang, CapabilityType.TOKENIZER)
        return [sentence.to_dict() for sentence in self.tokenize(text, language)]
