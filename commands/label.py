"""
Tokens labeling command
"""
from typing import Any, Dict, List, Optional, Union

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from metrics import observe_model
from nlp_models import Sentence, TokenLabel


class LabelCommand(Command):
    """Assign an IOB label to each token of a text, for one or all the domains"""

    name = "label"

    def __call__(self,
                 text: str,
                 lang: Optional[str] = None,
                 domain: Optional[str] = None) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        check_text(text)

        language = self.resolver.language(text, lang, CapabilityType.TOKENIZER)
        self.resolver.resolve_domains(CapabilityType.LABELER, domain).unwrap()
        sentences = self.tokenize(text, language)

        return self.for_domains(
            CapabilityType.LABELER, domain,
            lambda name: self._label_by_domain(name, sentences, text)
        )

    def predict(self, domain: str, sentences: List[Sentence]) -> List[List[TokenLabel]]:
        """The labels of the tokens of each sentence"""
        labeler = self.registry[CapabilityType.LABELER].get(domain)
        with observe_model(CapabilityType.LABELER.value):
            return [labeler.predict(sentence) for sentence in sentences]

    def _label_by_domain(self, domain: str, sentences: List[Sentence], text: str) -> Dict[str, Any]:
        self.logger.debug(f"{domain} labeling of text `{cut_text(text)}`")

        return {
            "domain": domain,
            "sentences": [
                {
                    "tokens": [
                        {"form": token.form, "iob": label.iob, "label": label.value, "score": label.score}
                        for token, label in zip(sentence.tokens, labels)
                    ]
                }
                for sentence, labels in zip(sentences, self.predict(domain, sentences))
            ]
        }
