"""
Capability slots of the registry

A capability is either absent (never configured), keyed (one model per
language or per domain) or single (one model serving any request).
"""
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Union


class CapabilityType(str, Enum):
    """The capabilities the server can expose"""
    LANGUAGE_DETECTOR = "language_detector"
    TOKENIZER = "tokenizer"
    PARSER = "parser"
    MORPHOLOGY = "morphology"
    WORD_EMBEDDINGS = "word_embeddings"
    CLASSIFIER = "classifier"
    FRAME_EXTRACTOR = "frame_extractor"
    LABELER = "labeler"
    LOCATIONS_DICTIONARY = "locations_dictionary"
    SUMMARIZER = "summarizer"
    COMPARATOR = "comparator"
    MORPHO_ANALYZER = "morpho_analyzer"


class KeyKind(str, Enum):
    """What the keys of a keyed capability identify"""
    LANGUAGE = "language"
    DOMAIN = "domain"


class Absent:
    """A capability that has not been configured"""

    is_present = False

    def keys(self) -> FrozenSet[str]:
        return frozenset()

    def __repr__(self) -> str:
        return "Absent()"


ABSENT = Absent()


class Keyed:
    """A capability with one model per language or domain"""

    def __init__(self, models: Mapping[str, Any], key_kind: KeyKind):
        self.models = MappingProxyType(dict(models))
        self.key_kind = key_kind

    @property
    def is_present(self) -> bool:
        return len(self.models) > 0

    def keys(self) -> FrozenSet[str]:
        return frozenset(self.models)

    def get(self, key: str) -> Optional[Any]:
        return self.models.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self.models

    def __repr__(self) -> str:
        return f"Keyed({self.key_kind.value}: {sorted(self.models)})"


class Single:
    """A capability served by one model"""

    is_present = True

    def __init__(self, model: Any):
        self.model = model

    def keys(self) -> FrozenSet[str]:
        return frozenset()

    def __repr__(self) -> str:
        return f"Single({type(self.model).__name__})"


Capability = Union[Absent, Keyed, Single]


def intersect_keys(*capabilities: Capability) -> Optional[FrozenSet[str]]:
    """
    Intersect the keys of keyed capabilities

    Returns:
        The common keys, None if any of the capabilities is absent
    """
    keys = None
    for capability in capabilities:
        if not isinstance(capability, Keyed) or not capability.is_present:
            return None
        keys = capability.keys() if keys is None else keys & capability.keys()
    return keys


def derive(prerequisites: Iterable[Capability],
           factory: Callable[[str], Any],
           key_kind: KeyKind = KeyKind.LANGUAGE) -> Capability:
    """
    Build a capability present for the keys shared by all its prerequisites

    The factory is called once per common key. The result is absent if a
    prerequisite is absent or if the prerequisites have no key in common.
    """
    keys = intersect_keys(*prerequisites)
    if not keys:
        return ABSENT

    models: Dict[str, Any] = {key: factory(key) for key in sorted(keys)}
    return Keyed(models, key_kind)
