"""
Locations finding command
"""
from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from capabilities import CapabilityRegistry, CapabilityType
from commands.base import Command, check_text, cut_text
from exceptions import InvalidParameter, MissingCandidateSource
from metrics import observe_model
from nlp_models import CandidateEntity, Location, ScoredLocation, Sentence
from resolver import Resolver


class CandidateModel(BaseModel):
    """A candidate location given by the caller"""
    name: str = Field(..., min_length=1)
    score: float
    occurrences: List[Tuple[int, int]] = Field(default_factory=list)

    def to_entity(self) -> CandidateEntity:
        return CandidateEntity(name=self.name, score=self.score, occurrences=tuple(self.occurrences))


def parse_candidates(raw: Any) -> Set[CandidateEntity]:
    """
    Raises:
        InvalidParameter: If the candidates are not a list of {name, score, occurrences?}
    """
    if not isinstance(raw, list):
        raise InvalidParameter("candidates", "expected a list of objects")
    try:
        return {CandidateModel.model_validate(item).to_entity() for item in raw}
    except PydanticValidationError as e:
        raise InvalidParameter("candidates", str(e.errors()[0]["msg"])) from e


class FindLocationsCommand(Command):
    """Find the locations mentioned in a text"""

    name = "locations"

    def __init__(self, registry: CapabilityRegistry, resolver: Resolver, labeler_domain: Optional[str] = None):
        super().__init__(registry, resolver)
        self.labeler_domain = labeler_domain

    def __call__(self,
                 text: str,
                 lang: Optional[str] = None,
                 candidates: Optional[Set[CandidateEntity]] = None) -> List[Dict[str, Any]]:
        check_text(text)
        self.logger.debug(f"Searching for locations mentioned in the text `{cut_text(text)}`")

        language = self.resolver.language(text, lang, CapabilityType.TOKENIZER)
        sentences = self.tokenize(text, language)

        if candidates is None:
            candidates = self.find_candidates(sentences)

        dictionary = self.registry[CapabilityType.LOCATIONS_DICTIONARY].model
        text_tokens = [token.form for sentence in sentences for token in sentence.tokens]

        with observe_model(CapabilityType.LOCATIONS_DICTIONARY.value):
            found = dictionary.find_locations(text_tokens, candidates)

        return [self._to_dict(scored) for scored in found]

    def find_candidates(self, sentences: List[Sentence]) -> Set[CandidateEntity]:
        """
        Derive the candidates from the entities found by the locations labeler

        A candidate is a B-I* run of labeled tokens. Candidates with the same name
        are merged keeping the best score and all the occurrences, given as
        ranges of token indices in the whole text.

        Raises:
            MissingCandidateSource: If the locations labeler is not configured or loaded
        """
        labelers = self.registry[CapabilityType.LABELER]
        if not self.labeler_domain or not labelers.is_present or self.labeler_domain not in labelers:
            raise MissingCandidateSource(self.labeler_domain)

        labeler = labelers.get(self.labeler_domain)
        spans: List[Tuple[str, float, int, int]] = []
        offset = 0

        for sentence in sentences:
            with observe_model(CapabilityType.LABELER.value):
                labels = labeler.predict(sentence)

            current: Optional[List[int]] = None
            for i, label in enumerate(labels):
                if label.iob == "B" or (label.iob == "I" and current is None):
                    if current is not None:
                        spans.append(self._span(sentence, labels, current, offset))
                    current = [i]
                elif label.iob == "I":
                    current.append(i)
                else:
                    if current is not None:
                        spans.append(self._span(sentence, labels, current, offset))
                    current = None
            if current is not None:
                spans.append(self._span(sentence, labels, current, offset))

            offset += len(sentence.tokens)

        merged: Dict[str, Tuple[float, List[Tuple[int, int]]]] = {}
        for name, score, start, end in spans:
            best, occurrences = merged.get(name, (score, []))
            merged[name] = (max(best, score), occurrences + [(start, end)])

        return {
            CandidateEntity(name=name, score=score, occurrences=tuple(occurrences))
            for name, (score, occurrences) in merged.items()
        }

    @staticmethod
    def _span(sentence: Sentence, labels: list, indices: List[int], offset: int) -> Tuple[str, float, int, int]:
        name = " ".join(sentence.tokens[i].form for i in indices)
        score = sum(labels[i].score for i in indices) / len(indices)
        return name, score, offset + indices[0], offset + indices[-1]

    def _to_dict(self, scored: ScoredLocation) -> Dict[str, Any]:
        location = scored.location
        result: Dict[str, Any] = {
            "id": location.id,
            "name": location.name,
            "type": location.type,
            "score": scored.score,
        }

        parents = {
            "adminArea1": self._parent(location.admin_area1_id, "name"),
            "adminArea2": self._parent(location.admin_area2_id, "name"),
            "countryIso": self._parent(location.country_id, "iso_a2"),
            "country": self._parent(location.country_id, "name"),
            "continent": self._parent(location.continent_id, "name"),
        }
        result.update({key: value for key, value in parents.items() if value is not None})
        return result

    def _parent(self, location_id: Optional[str], attribute: str) -> Optional[str]:
        if location_id is None:
            return None
        parent: Optional[Location] = self.registry[CapabilityType.LOCATIONS_DICTIONARY].model.get(location_id)
        return getattr(parent, attribute) if parent is not None else None
