"""
Base class of the commands

A command implements one capability of the server on top of the registry:
it checks its input, resolves language and domains through the resolver,
invokes the models and returns a JSON-serializable result.
"""
from typing import Any, Callable, Dict, List, Optional, Union

from capabilities import CapabilityRegistry, CapabilityType
from exceptions import BlankText
from language import Language
from metrics import observe_model
from nlp_models import ParsedSentence, Sentence
from resolver import Resolver
from logger import get_logger

CUT_TEXT_SUFFIX = "[...]"


def cut_text(text: str, max_chars: int = 50) -> str:
    """Shorten a text for the logs"""
    if len(text) <= max_chars:
        return text
    return text[:max_chars - len(CUT_TEXT_SUFFIX)] + CUT_TEXT_SUFFIX


def check_text(text: Optional[str]) -> str:
    """
    Raises:
        BlankText: If the text is missing, empty or made of whitespace only
    """
    if text is None or not text.strip():
        raise BlankText()
    return text


class Command:
    """Base class of the commands, built on the shared registry and resolver"""

    name: str = "command"

    def __init__(self, registry: CapabilityRegistry, resolver: Resolver):
        self.registry = registry
        self.resolver = resolver
        self.logger = get_logger(f"commands.{self.name}")

    def close(self):
        """Release the resources owned by the command"""

    def tokenize(self, text: str, language: Language) -> List[Sentence]:
        """Split a text with the tokenizer of a language, dropping empty sentences"""
        tokenizer = self.registry[CapabilityType.TOKENIZER].get(language.iso_code)
        with observe_model(CapabilityType.TOKENIZER.value):
            sentences = tokenizer.tokenize(text)
        return [sentence for sentence in sentences if sentence.tokens]

    def parse(self, text: str, language: Language) -> List[ParsedSentence]:
        """Tokenize and parse a text, using the morphology dictionary of the language if loaded"""
        lang = language.iso_code
        parser = self.registry[CapabilityType.PARSER].get(lang)
        morphology = self.registry[CapabilityType.MORPHOLOGY]
        dictionary = morphology.get(lang) if morphology.is_present else None

        sentences = self.tokenize(text, language)
        with observe_model(CapabilityType.PARSER.value):
            return [parser.parse(sentence, i, dictionary) for i, sentence in enumerate(sentences)]

    def for_domains(self,
                    capability_type: CapabilityType,
                    domain: Optional[str],
                    process: Callable[[str], Dict[str, Any]]) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """
        Process a request for one domain, or for all of them when no domain is given

        On fan-out the results are returned as a list, one per domain. A failure
        in any domain aborts the whole request.
        """
        resolution = self.resolver.resolve_domains(capability_type, domain)
        results = [process(name) for name in resolution.unwrap()]
        return results if resolution.fan_out else results[0]
