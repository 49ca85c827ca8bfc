"""
Compare command: similarity of a text with a set of other texts
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from capabilities import CapabilityRegistry, CapabilityType
from commands.base import Command, check_text, cut_text
from commands.progress import Progress
from exceptions import InvalidParameter
from metrics import observe_model
from nlp_models import TextComparator
from resolver import Resolver


class ComparingText(BaseModel):
    id: int
    text: str


class ComparingTexts(BaseModel):
    """The texts to compare with the base text, identified by unique ids"""
    comparing: List[ComparingText]

    @field_validator("comparing")
    @classmethod
    def validate_unique_ids(cls, v: List[ComparingText]) -> List[ComparingText]:
        ids = [item.id for item in v]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicated ids: {', '.join(map(str, duplicates))}")
        return v


def parse_comparing(raw: Any) -> Dict[int, str]:
    """
    Raises:
        InvalidParameter: If the texts are not a list of {id, text} with unique ids
    """
    try:
        parsed = ComparingTexts.model_validate({"comparing": raw})
    except PydanticValidationError as e:
        raise InvalidParameter("comparing", str(e.errors()[0]["msg"])) from e
    return {item.id: item.text for item in parsed.comparing}


class CompareCommand(Command):
    """
    Compare a text with many others

    The comparing texts are split into chunks of fixed size, processed
    concurrently by a pool of workers owned by the command.
    """

    name = "compare"

    def __init__(self, registry: CapabilityRegistry, resolver: Resolver, workers: int = 4, chunk_size: int = 50):
        super().__init__(registry, resolver)
        self.chunk_size = chunk_size
        self.executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="compare")

    def __call__(self, text: str, comparing: Dict[int, str], lang: Optional[str] = None) -> List[Dict[str, Any]]:
        check_text(text)
        for comparing_text in comparing.values():
            check_text(comparing_text)

        self.logger.debug(f"Comparing text `{cut_text(text)}` with other {len(comparing)}")

        language = self.resolver.language(text, lang, CapabilityType.COMPARATOR)
        comparator = self.registry[CapabilityType.COMPARATOR].get(language.iso_code)

        with observe_model(CapabilityType.COMPARATOR.value):
            base = comparator.parse(text)
            scores = self.compare(comparator, base, list(comparing.items()))

        self.logger.debug("Texts compared")
        return [{"id": text_id, "score": score} for text_id, score in scores]

    def compare(self,
                comparator: TextComparator,
                base: Any,
                items: List[Tuple[int, str]]) -> List[Tuple[int, float]]:
        """Score the items against the parsed base text, sorted by descending score then ascending id"""
        progress = Progress(total=len(items), logger=self.logger, description="Comparing progress")
        chunks = [items[i:i + self.chunk_size] for i in range(0, len(items), self.chunk_size)]

        futures = [
            self.executor.submit(self._compare_chunk, comparator, base, chunk, progress) for chunk in chunks
        ]

        scores: List[Tuple[int, float]] = []
        for future in futures:
            scores.extend(future.result())

        return sorted(scores, key=lambda item: (-item[1], item[0]))

    @staticmethod
    def _compare_chunk(comparator: TextComparator,
                       base: Any,
                       chunk: List[Tuple[int, str]],
                       progress: Progress) -> List[Tuple[int, float]]:
        results = []
        for text_id, text in chunk:
            results.append((text_id, comparator.compare(base, comparator.parse(text))))
            progress.tick()
        return results

    def close(self):
        self.executor.shutdown(wait=True)
