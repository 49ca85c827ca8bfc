"""
Interfaces of the pretrained models served by the NLP server
"""
from nlp_models.base import (
    Token,
    Sentence,
    ParsedToken,
    ParsedSentence,
    TokenClassification,
    Expression,
    Slot,
    Intent,
    FramesOutput,
    TokenLabel,
    CandidateEntity,
    Location,
    ScoredLocation,
    Summary,
    Tokenizer,
    LanguageDetector,
    FrequencyDictionary,
    MorphologyDictionary,
    Parser,
    Classifier,
    FrameExtractor,
    Labeler,
    LocationsDictionary,
    TextComparator,
    Summarizer,
)
from nlp_models.embeddings import WordEmbeddings

__all__ = [
    "Token",
    "Sentence",
    "ParsedToken",
    "ParsedSentence",
    "TokenClassification",
    "Expression",
    "Slot",
    "Intent",
    "FramesOutput",
    "TokenLabel",
    "CandidateEntity",
    "Location",
    "ScoredLocation",
    "Summary",
    "Tokenizer",
    "LanguageDetector",
    "FrequencyDictionary",
    "MorphologyDictionary",
    "Parser",
    "Classifier",
    "FrameExtractor",
    "Labeler",
    "LocationsDictionary",
    "TextComparator",
    "Summarizer",
    "WordEmbeddings",
]
