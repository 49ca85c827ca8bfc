"""
Language detection command
"""
from typing import Any, Dict, List

from capabilities import CapabilityType
from commands.base import Command, check_text, cut_text
from formatting import language_to_dict
from metrics import observe_model


class DetectLanguageCommand(Command):
    """Detect the language of a text, or of each of its tokens"""

    name = "detect_language"

    def __call__(self, text: str, distribution: bool = False) -> Dict[str, Any]:
        check_text(text)
        self.logger.debug(f"Detecting language of text `{cut_text(text)}`")

        resolution = self.resolver.detect(text, with_distribution=distribution)
        return language_to_dict(resolution.unwrap(), resolution.distribution)

    def per_token(self, text: str, distribution: bool = False) -> List[Dict[str, Any]]:
        check_text(text)
        self.logger.debug(f"Detecting language per token of text `{cut_text(text)}`")

        detector = self.registry[CapabilityType.LANGUAGE_DETECTOR].model

        with observe_model(CapabilityType.LANGUAGE_DETECTOR.value):
            classifications = detector.classify_tokens(text)

        results = []
        for classification in classifications:
            item: Dict[str, Any] = {
                "word": classification.word,
                "language": detector.get_language(classification.scores).to_dict()
            }
            if distribution:
                item["distribution"] = {
                    "languages": [
                        {"language": lang.iso_code, "score": score}
                        for lang, score in detector.get_full_distribution(classification.scores)
                    ],
                    "charsImportance": list(classification.chars_importance)
                }
            results.append(item)

        return results
