"""
Categorize command: sentence classification by domain
"""
from typing import Any, Dict, List, Optional, Union

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from metrics import observe_model
from nlp_models import Sentence


class CategorizeCommand(Command):
    """Classify each sentence of a text into the categories of one or all the domains"""

    name = "categorize"

    def __call__(self,
                 text: str,
                 lang: Optional[str] = None,
                 domain: Optional[str] = None,
                 distribution: bool = False) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        check_text(text)

        language = self.resolver.language(text, lang, CapabilityType.TOKENIZER)
        self.resolver.resolve_domains(CapabilityType.CLASSIFIER, domain).unwrap()
        sentences = self.tokenize(text, language)

        return self.for_domains(
            CapabilityType.CLASSIFIER, domain,
            lambda name: self._categorize(name, sentences, text, distribution)
        )

    def _categorize(self, domain: str, sentences: List[Sentence], text: str, distribution: bool) -> Dict[str, Any]:
        self.logger.debug(f"{domain} categorization of text `{cut_text(text)}`")

        classifier = self.registry[CapabilityType.CLASSIFIER].get(domain)
        with observe_model(CapabilityType.CLASSIFIER.value):
            predictions = classifier.classify(sentences)

        categories = []
        for scores in predictions:
            best = max(range(len(scores)), key=lambda i: scores[i])
            category: Dict[str, Any] = {"id": best, "score": scores[best]}
            if distribution:
                category["distribution"] = list(scores)
            categories.append(category)

        return {"domain": domain, "categories": categories}
