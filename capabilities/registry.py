"""
Capability registry: the models loaded at startup, keyed by language or domain

The registry is built once from the settings and never changes afterwards,
so it can be shared by all the request workers without locking.
"""
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from capabilities.capability import (
    ABSENT,
    Capability,
    CapabilityType,
    Keyed,
    KeyKind,
    Single,
    derive,
)
from capabilities.keys import keyed_resources
from capabilities.loaders import LoaderRegistry, Resource
from config import Settings
from exceptions import MissingAuxiliaryResource
from nlp_models import ParsedSentence, Summarizer, Summary
from logger import get_logger

logger = get_logger(__name__)


class BoundSummarizer:
    """A summarizer bound to the lemmas to ignore for one language"""

    def __init__(self, summarizer: Summarizer, ignore_lemmas: FrozenSet[str] = frozenset()):
        self.summarizer = summarizer
        self.ignore_lemmas = ignore_lemmas

    def summarize(self, sentences: List[ParsedSentence], min_support: float) -> Summary:
        return self.summarizer.summarize(sentences, set(self.ignore_lemmas), min_support)


class CapabilityRegistry:
    """Read-only view of the capability slots"""

    def __init__(self, slots: Mapping[CapabilityType, Capability]):
        self._slots = MappingProxyType({
            capability_type: slots.get(capability_type, ABSENT) for capability_type in CapabilityType
        })

    def get(self, capability_type: CapabilityType) -> Capability:
        return self._slots[capability_type]

    def __getitem__(self, capability_type: CapabilityType) -> Capability:
        return self._slots[capability_type]

    def is_present(self, *capability_types: CapabilityType) -> bool:
        """Whether all the given capabilities are present"""
        return all(self._slots[t].is_present for t in capability_types)

    def key_sets(self) -> Dict[str, Optional[List[str]]]:
        """
        The sorted keys of each capability

        Returns:
            A map from capability name to its keys, an empty list for the single
            capabilities and None for the absent ones
        """
        return {
            capability_type.value: (sorted(capability.keys()) if capability.is_present else None)
            for capability_type, capability in self._slots.items()
        }

    def __repr__(self) -> str:
        present = [t.value for t, c in self._slots.items() if c.is_present]
        return f"CapabilityRegistry({', '.join(present)})"


class RegistryBuilder:
    """Loads the configured resources and derives the composite capabilities"""

    def __init__(self, settings: Settings, loaders: Optional[LoaderRegistry] = None):
        self.settings = settings
        self.loaders = loaders or LoaderRegistry()

    def build(self) -> CapabilityRegistry:
        logger.info("Building the capability registry")
        slots: Dict[CapabilityType, Capability] = {}

        slots[CapabilityType.LANGUAGE_DETECTOR] = self._build_language_detector()

        per_language = [
            (CapabilityType.TOKENIZER, Resource.TOKENIZER, self.settings.tokenizer_models_dir),
            (CapabilityType.PARSER, Resource.PARSER, self.settings.parser_models_dir),
            (CapabilityType.MORPHOLOGY, Resource.MORPHOLOGY, self.settings.morphology_dictionaries_dir),
            (CapabilityType.WORD_EMBEDDINGS, Resource.WORD_EMBEDDINGS, self.settings.word_embeddings_dir),
        ]
        for capability_type, resource, directory in per_language:
            slots[capability_type] = self._build_keyed(resource, directory, KeyKind.LANGUAGE)

        slots[CapabilityType.CLASSIFIER] = self._build_keyed(
            Resource.CLASSIFIER, self.settings.classifier_models_dir, KeyKind.DOMAIN,
            embeddings=(Resource.CLASSIFIER_EMBEDDINGS, self.settings.classifier_embeddings_dir)
        )
        slots[CapabilityType.FRAME_EXTRACTOR] = self._build_keyed(
            Resource.FRAME_EXTRACTOR, self.settings.frame_extractor_models_dir, KeyKind.DOMAIN,
            embeddings=(Resource.FRAME_EXTRACTOR_EMBEDDINGS, self.settings.frame_extractor_embeddings_dir)
        )
        slots[CapabilityType.LABELER] = self._build_keyed(
            Resource.LABELER, self.settings.labeler_models_dir, KeyKind.DOMAIN
        )

        if self.settings.locations_dictionary is not None:
            slots[CapabilityType.LOCATIONS_DICTIONARY] = Single(
                self.loaders.load(Resource.LOCATIONS_DICTIONARY, self.settings.locations_dictionary)
            )

        slots[CapabilityType.SUMMARIZER] = self._build_summarizer(slots)
        slots[CapabilityType.COMPARATOR] = self._build_comparator(slots)
        morphology = slots[CapabilityType.MORPHOLOGY]
        slots[CapabilityType.MORPHO_ANALYZER] = derive(
            [slots[CapabilityType.TOKENIZER], morphology],
            factory=lambda lang: morphology.get(lang)
        )

        registry = CapabilityRegistry(slots)
        logger.info(f"Capability registry ready: {registry}")
        return registry

    def _build_language_detector(self) -> Capability:
        if self.settings.language_detector_model is None:
            logger.info("No language detector configured")
            return ABSENT

        detector = self.loaders.load(Resource.LANGUAGE_DETECTOR, self.settings.language_detector_model)
        cjk_tokenizer = self.loaders.load(Resource.CJK_TOKENIZER, self.settings.cjk_tokenizer_model)

        frequency_dictionary = None
        if self.settings.frequency_dictionary is not None:
            frequency_dictionary = self.loaders.load(
                Resource.FREQUENCY_DICTIONARY, self.settings.frequency_dictionary
            )
        else:
            logger.info("No frequency dictionary used to detect the language")

        detector.attach_resources(cjk_tokenizer, frequency_dictionary)
        return Single(detector)

    def _build_keyed(self,
                     resource: Resource,
                     directory: Optional[Path],
                     key_kind: KeyKind,
                     embeddings: Optional[tuple] = None) -> Capability:
        """Load one model per file of a directory, merging its auxiliary embeddings if configured"""
        if directory is None:
            return ABSENT

        by_language = key_kind == KeyKind.LANGUAGE
        delimiter = self.settings.key_delimiter
        models: Dict[str, Any] = {
            key: self.loaders.load(resource, path, key)
            for key, path in keyed_resources(directory, by_language, delimiter).items()
        }

        if embeddings is not None and embeddings[1] is not None:
            embeddings_resource, embeddings_dir = embeddings
            paths = keyed_resources(embeddings_dir, by_language, delimiter)
            for key, model in models.items():
                if key not in paths:
                    raise MissingAuxiliaryResource(embeddings_resource.value, key)
                model.set_embeddings(self.loaders.load(embeddings_resource, paths[key], key))

        return Keyed(models, key_kind)

    def _build_summarizer(self, slots: Mapping[CapabilityType, Capability]) -> Capability:
        if self.settings.summarizer_model is None:
            return ABSENT

        summarizer = self.loaders.load(Resource.SUMMARIZER, self.settings.summarizer_model)

        blacklists: Dict[str, Path] = {}
        if self.settings.lemmas_blacklist_dir is not None:
            blacklists = keyed_resources(
                self.settings.lemmas_blacklist_dir, by_language=True, delimiter=self.settings.key_delimiter
            )

        def bind(lang: str) -> BoundSummarizer:
            if lang not in blacklists:
                return BoundSummarizer(summarizer)
            return BoundSummarizer(summarizer, self.loaders.load(Resource.LEMMAS_BLACKLIST, blacklists[lang], lang))

        return derive([slots[CapabilityType.TOKENIZER], slots[CapabilityType.PARSER]], factory=bind)

    def _build_comparator(self, slots: Mapping[CapabilityType, Capability]) -> Capability:
        tokenizers = slots[CapabilityType.TOKENIZER]
        parsers = slots[CapabilityType.PARSER]
        morphology = slots[CapabilityType.MORPHOLOGY]
        embeddings = slots[CapabilityType.WORD_EMBEDDINGS]

        return derive(
            [tokenizers, parsers, morphology, embeddings],
            factory=lambda lang: self.loaders.comparator_factory(
                tokenizers.get(lang), parsers.get(lang), morphology.get(lang), embeddings.get(lang)
            )
        )


def build_registry(settings: Settings, loaders: Optional[LoaderRegistry] = None) -> CapabilityRegistry:
    """Build the capability registry from the settings"""
    return RegistryBuilder(settings, loaders).build()
