"""
Frames extraction command
"""
from typing import Any, Dict, List, Optional, Union

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from metrics import observe_model
from nlp_models import Sentence


class ExtractFramesCommand(Command):
    """Extract the intent and the slots of each sentence of a text"""

    name = "frames"

    def __call__(self,
                 text: str,
                 lang: Optional[str] = None,
                 domain: Optional[str] = None,
                 distribution: bool = False) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        check_text(text)

        language = self.resolver.language(text, lang, CapabilityType.TOKENIZER)
        self.resolver.resolve_domains(CapabilityType.FRAME_EXTRACTOR, domain).unwrap()
        sentences = self.tokenize(text, language)

        return self.for_domains(
            CapabilityType.FRAME_EXTRACTOR, domain,
            lambda name: self._extract(name, sentences, text, distribution)
        )

    def _extract(self, domain: str, sentences: List[Sentence], text: str, distribution: bool) -> Dict[str, Any]:
        self.logger.debug(f"{domain} frames extraction from text `{cut_text(text)}`")

        extractor = self.registry[CapabilityType.FRAME_EXTRACTOR].get(domain)
        results = []

        for sentence in sentences:
            forms = [token.form for token in sentence.tokens]
            with observe_model(CapabilityType.FRAME_EXTRACTOR.value):
                output = extractor.extract(sentence)

            result: Dict[str, Any] = {"intent": output.intent.to_dict(forms)}
            if distribution:
                ranking = sorted(output.distribution.items(), key=lambda item: item[1], reverse=True)
                result["distribution"] = [{"intent": name, "score": score} for name, score in ranking]
            results.append(result)

        return {"domain": domain, "sentences": results}
