"""
Loader registry: how each resource type is read from disk

Models are opaque collaborators. The built-in loaders read pickled objects
implementing the interfaces of nlp_models, spaCy pipeline directories and
text-format word embeddings. Other formats are supported by registering a
different loader for the resource.
"""
import pickle
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Type

from exceptions import ConfigurationError
from nlp_models import (
    Classifier,
    FrameExtractor,
    FrequencyDictionary,
    Labeler,
    LanguageDetector,
    LocationsDictionary,
    MorphologyDictionary,
    Parser,
    Summarizer,
    TextComparator,
    Tokenizer,
    WordEmbeddings,
)
from nlp_models.comparator import EmbeddingsTextComparator
from logger import get_logger

logger = get_logger(__name__)

Loader = Callable[[Path], Any]
ComparatorFactory = Callable[[Tokenizer, Parser, MorphologyDictionary, WordEmbeddings], TextComparator]


class Resource(str, Enum):
    """The resources that can be configured"""
    LANGUAGE_DETECTOR = "language_detector"
    CJK_TOKENIZER = "cjk_tokenizer"
    FREQUENCY_DICTIONARY = "frequency_dictionary"
    TOKENIZER = "tokenizer"
    PARSER = "parser"
    MORPHOLOGY = "morphology"
    WORD_EMBEDDINGS = "word_embeddings"
    CLASSIFIER = "classifier"
    CLASSIFIER_EMBEDDINGS = "classifier_embeddings"
    FRAME_EXTRACTOR = "frame_extractor"
    FRAME_EXTRACTOR_EMBEDDINGS = "frame_extractor_embeddings"
    LABELER = "labeler"
    LOCATIONS_DICTIONARY = "locations_dictionary"
    SUMMARIZER = "summarizer"
    LEMMAS_BLACKLIST = "lemmas_blacklist"


def load_serialized(path: Path, expected_type: Type) -> Any:
    """Unpickle a model, checking that it implements the expected interface"""
    with open(path, "rb") as f:
        model = pickle.load(f)

    if not isinstance(model, expected_type):
        raise ConfigurationError(
            f"'{path}' contains a {type(model).__name__}, expected a {expected_type.__name__}"
        )
    return model


def load_lemmas_blacklist(path: Path) -> FrozenSet[str]:
    """One lemma per line, empty lines and '#' comments are ignored"""
    with open(path, "r", encoding="utf-8") as f:
        lines = (line.strip() for line in f)
        return frozenset(line for line in lines if line and not line.startswith("#"))


def load_embeddings(path: Path) -> WordEmbeddings:
    try:
        return WordEmbeddings.load(path)
    except ValueError as e:
        raise ConfigurationError(f"Invalid word embeddings file: {e}") from e


def load_tokenizer(path: Path) -> Tokenizer:
    if path.is_dir():
        from nlp_models.spacy_backend import SpacyTokenizer, load_spacy_pipeline
        return SpacyTokenizer(load_spacy_pipeline(path))
    return load_serialized(path, Tokenizer)


def load_parser(path: Path) -> Parser:
    if path.is_dir():
        from nlp_models.spacy_backend import SpacyParser, load_spacy_pipeline
        return SpacyParser(load_spacy_pipeline(path))
    return load_serialized(path, Parser)


def _serialized(expected_type: Type) -> Loader:
    return lambda path: load_serialized(path, expected_type)


class LoaderRegistry:
    """Registry of the loaders of each resource"""

    def __init__(self):
        self._loaders: Dict[Resource, Loader] = {}
        self.comparator_factory: ComparatorFactory = EmbeddingsTextComparator

        # Register built-in loaders
        self._register_builtin_loaders()

    def _register_builtin_loaders(self):
        """Register built-in loaders"""
        self.register(Resource.LANGUAGE_DETECTOR, _serialized(LanguageDetector))
        self.register(Resource.CJK_TOKENIZER, load_tokenizer)
        self.register(Resource.FREQUENCY_DICTIONARY, _serialized(FrequencyDictionary))
        self.register(Resource.TOKENIZER, load_tokenizer)
        self.register(Resource.PARSER, load_parser)
        self.register(Resource.MORPHOLOGY, _serialized(MorphologyDictionary))
        self.register(Resource.WORD_EMBEDDINGS, load_embeddings)
        self.register(Resource.CLASSIFIER, _serialized(Classifier))
        self.register(Resource.CLASSIFIER_EMBEDDINGS, load_embeddings)
        self.register(Resource.FRAME_EXTRACTOR, _serialized(FrameExtractor))
        self.register(Resource.FRAME_EXTRACTOR_EMBEDDINGS, load_embeddings)
        self.register(Resource.LABELER, _serialized(Labeler))
        self.register(Resource.LOCATIONS_DICTIONARY, _serialized(LocationsDictionary))
        self.register(Resource.SUMMARIZER, _serialized(Summarizer))
        self.register(Resource.LEMMAS_BLACKLIST, load_lemmas_blacklist)

        logger.debug(f"Registered {len(self._loaders)} built-in loaders")

    def register(self, resource: Resource, loader: Loader):
        """Register the loader of a resource, replacing the previous one"""
        if not callable(loader):
            raise ValueError(f"The loader of {resource.value} must be callable")
        self._loaders[Resource(resource)] = loader

    def get(self, resource: Resource) -> Loader:
        return self._loaders[Resource(resource)]

    def list_resources(self) -> List[str]:
        return [resource.value for resource in self._loaders]

    def load(self, resource: Resource, path: Path, key: Optional[str] = None) -> Any:
        """Load a resource, logging its identity"""
        label = f"{resource.value} '{key}'" if key else resource.value
        logger.info(f"Loading {label} from '{path}'")
        try:
            return self.get(resource)(Path(path))
        except ConfigurationError:
            raise
        except (OSError, ImportError, AttributeError, pickle.UnpicklingError, EOFError) as e:
            raise ConfigurationError(f"Cannot load {label} from '{path}': {e}") from e
