"""
Summarize command
"""
from typing import Any, Dict, Optional

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from metrics import observe_model

LONG_TEXT_LENGTH = 10000


def min_itemset_support(text: str) -> float:
    return 0.001 if len(text) > LONG_TEXT_LENGTH else 0.01


class SummarizeCommand(Command):
    """Extractive summary of a text: salient sentences, itemsets and keywords"""

    name = "summarize"

    def __call__(self, text: str, lang: Optional[str] = None) -> Dict[str, Any]:
        check_text(text)
        self.logger.debug(f"Summarizing text `{cut_text(text)}`")

        language = self.resolver.language(text, lang, CapabilityType.SUMMARIZER)
        sentences = self.parse(text, language)
        summarizer = self.registry[CapabilityType.SUMMARIZER].get(language.iso_code)

        with observe_model(CapabilityType.SUMMARIZER.value):
            summary = summarizer.summarize(sentences, min_itemset_support(text))

        return {
            "salience_distribution": list(summary.salience_distribution),
            "sentences": [
                {"text": sentence.build_text(), "score": score}
                for sentence, score in zip(sentences, summary.salience_scores)
            ],
            "itemsets": [{"text": itemset, "score": score} for itemset, score in summary.itemsets],
            "keywords": [{"keyword": keyword, "score": score} for keyword, score in summary.keywords],
        }
