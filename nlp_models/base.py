"""
Base classes and interfaces for the pretrained models

The server consumes every model as a black box through the narrow
interfaces below: they accept and return the plain data types defined here.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from language import Language


# ==================== Text Structures ====================

@dataclass(frozen=True)
class Token:
    """A token of a text, with its char offsets (end included)"""
    form: str
    start: int
    end: int

    def to_dict(self) -> Dict[str, Any]:
        return {"form": self.form, "start": self.start, "end": self.end}


@dataclass
class Sentence:
    """A tokenized sentence of a text"""
    start: int
    end: int
    tokens: List[Token] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "tokens": [token.to_dict() for token in self.tokens]
        }


@dataclass
class ParsedToken:
    """
    A token annotated morpho-syntactically

    Attributes:
        id: Token identifier, unique within its sentence
        form: Surface form, None for tokens that do not appear in the text (e.g. split contractions)
        pos: Part-of-speech tags (more than one for composite tokens)
        governor: Id of the governor token, None for the root
        dependencies: Dependency labels towards the governor
    """
    id: int
    form: Optional[str]
    start: Optional[int] = None
    end: Optional[int] = None
    lemma: Optional[str] = None
    pos: List[str] = field(default_factory=list)
    governor: Optional[int] = None
    dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "form": self.form,
            "start": self.start,
            "end": self.end,
            "lemma": self.lemma,
            "pos": list(self.pos),
            "head": self.governor,
            "dependencies": list(self.dependencies)
        }


@dataclass
class ParsedSentence:
    """A sentence parsed morpho-syntactically"""
    id: int
    start: int
    end: int
    tokens: List[ParsedToken] = field(default_factory=list)

    def build_text(self) -> str:
        return " ".join(token.form for token in self.tokens if token.form is not None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "tokens": [token.to_dict() for token in self.tokens]
        }


# ==================== Model Outputs ====================

@dataclass
class TokenClassification:
    """Language classification of a single token"""
    word: str
    scores: List[float]  # aligned with LanguageDetector.supported_languages
    chars_importance: List[float] = field(default_factory=list)


@dataclass
class Expression:
    """A numerical or date-time expression found in a sentence (token indices inclusive)"""
    type: str
    value: Any
    start_token: int
    end_token: int


@dataclass
class Slot:
    """A slot of an intent, referencing tokens by index"""
    name: str
    token_indices: List[int] = field(default_factory=list)


@dataclass
class Intent:
    """The intent of a sentence with its slots"""
    name: str
    slots: List[Slot] = field(default_factory=list)

    def to_dict(self, forms: Sequence[str]) -> Dict[str, Any]:
        return {
            "name": self.name,
            "slots": [
                {
                    "name": slot.name,
                    "tokens": [{"index": i, "form": forms[i]} for i in slot.token_indices]
                }
                for slot in self.slots
            ]
        }


@dataclass
class FramesOutput:
    """Output of a frame extractor for a sentence"""
    intent: Intent
    distribution: Dict[str, float] = field(default_factory=dict)


@dataclass
class TokenLabel:
    """IOB label of a token"""
    iob: str  # 'B', 'I' or 'O'
    value: str
    score: float


@dataclass(frozen=True)
class CandidateEntity:
    """A text span that could mention a location (occurrences are token ranges, inclusive)"""
    name: str
    score: float
    occurrences: Tuple[Tuple[int, int], ...] = ()


@dataclass
class Location:
    """An entry of the locations dictionary"""
    id: str
    name: str
    type: str
    iso_a2: Optional[str] = None
    admin_area1_id: Optional[str] = None
    admin_area2_id: Optional[str] = None
    country_id: Optional[str] = None
    continent_id: Optional[str] = None


@dataclass
class ScoredLocation:
    """A location found in a text"""
    location: Location
    score: float


@dataclass
class Summary:
    """Extractive summary of a text"""
    salience_distribution: List[float]
    salience_scores: List[float]  # one per sentence
    itemsets: List[Tuple[str, float]] = field(default_factory=list)
    keywords: List[Tuple[str, float]] = field(default_factory=list)


# ==================== Model Interfaces ====================

class Tokenizer(ABC):
    """Splits a text into sentences and tokens"""

    @abstractmethod
    def tokenize(self, text: str) -> List[Sentence]:
        pass


class FrequencyDictionary(ABC):
    """Word frequencies per language, used to refine a language detection"""

    @abstractmethod
    def get_frequencies(self, word: str) -> Optional[List[float]]:
        pass


class LanguageDetector(ABC):
    """Classifies the language of a text"""

    def __init__(self):
        self.cjk_tokenizer: Optional[Tokenizer] = None
        self.frequency_dictionary: Optional[FrequencyDictionary] = None

    @property
    @abstractmethod
    def supported_languages(self) -> List[Language]:
        """Languages in the order of the predicted scores"""
        pass

    @abstractmethod
    def predict(self, text: str) -> List[float]:
        """
        Predict the languages scores of a text

        Returns:
            One score per supported language
        """
        pass

    @abstractmethod
    def classify_tokens(self, text: str) -> List[TokenClassification]:
        pass

    def attach_resources(self,
                         cjk_tokenizer: Tokenizer,
                         frequency_dictionary: Optional[FrequencyDictionary] = None):
        """Set the auxiliary resources loaded apart from the model"""
        self.cjk_tokenizer = cjk_tokenizer
        self.frequency_dictionary = frequency_dictionary

    def get_language(self, scores: Sequence[float]) -> Language:
        best = max(range(len(scores)), key=lambda i: scores[i])
        return self.supported_languages[best]

    def get_full_distribution(self, scores: Sequence[float]) -> List[Tuple[Language, float]]:
        """Languages with their scores, sorted by descending score"""
        pairs = zip(self.supported_languages, scores)
        return sorted(pairs, key=lambda pair: pair[1], reverse=True)


class MorphologyDictionary(ABC):
    """Morphological analyses of the words of a language"""

    @abstractmethod
    def find_numbers(self, sentence: Sentence) -> List[Expression]:
        pass

    @abstractmethod
    def find_datetimes(self, sentence: Sentence) -> List[Expression]:
        pass


class Parser(ABC):
    """Morpho-syntactic parser"""

    @abstractmethod
    def parse(self, sentence: Sentence, sentence_id: int,
              morphology: Optional[MorphologyDictionary] = None) -> ParsedSentence:
        pass


class EmbeddingsConsumer(ABC):
    """A model whose word embeddings can be loaded apart from it"""

    embeddings: Any = None

    def set_embeddings(self, embeddings: Any):
        self.embeddings = embeddings


class Classifier(EmbeddingsConsumer):
    """Classifies the sentences of a text into the categories of a domain"""

    @abstractmethod
    def classify(self, sentences: List[Sentence]) -> List[List[float]]:
        """
        Returns:
            The categories distribution of each sentence
        """
        pass


class FrameExtractor(EmbeddingsConsumer):
    """Extracts the intent of a sentence"""

    @abstractmethod
    def extract(self, sentence: Sentence) -> FramesOutput:
        pass


class Labeler(ABC):
    """Assigns an IOB label to each token of a sentence"""

    @abstractmethod
    def predict(self, sentence: Sentence) -> List[TokenLabel]:
        pass


class LocationsDictionary(ABC):
    """Dictionary of the known locations"""

    @abstractmethod
    def get(self, location_id: str) -> Optional[Location]:
        pass

    @abstractmethod
    def find_locations(self,
                       text_tokens: List[str],
                       candidates: Set[CandidateEntity]) -> List[ScoredLocation]:
        """Disambiguate the candidates returning the best locations they refer to"""
        pass


class TextComparator(ABC):
    """Gives a similarity score to a couple of texts"""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Analyze a text once, so that it can be compared many times"""
        pass

    @abstractmethod
    def compare(self, parsed_a: Any, parsed_b: Any) -> float:
        pass


class Summarizer(ABC):
    """Extractive summarizer of parsed texts"""

    @abstractmethod
    def summarize(self,
                  sentences: List[ParsedSentence],
                  ignore_lemmas: Set[str],
                  min_support: float) -> Summary:
        pass
