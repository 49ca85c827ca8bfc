"""
Text comparator based on the mean word embeddings of the content words
"""
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from nlp_models.base import (
    MorphologyDictionary,
    ParsedSentence,
    Parser,
    TextComparator,
    Tokenizer,
)
from nlp_models.embeddings import WordEmbeddings, cosine_similarity

# POS tags of the tokens that do not carry meaning
IGNORED_POS = {"PUNCT", "SYM", "DET", "ADP", "CCONJ", "SCONJ", "PART", "SPACE"}


@dataclass
class ParsedText:
    """A text analyzed for the comparison"""
    sentences: List[ParsedSentence]
    vector: Optional[np.ndarray]


class EmbeddingsTextComparator(TextComparator):
    """Scores two texts by the cosine similarity of their mean lemma vectors"""

    def __init__(self,
                 tokenizer: Tokenizer,
                 parser: Parser,
                 morphology: MorphologyDictionary,
                 embeddings: WordEmbeddings):
        self.tokenizer = tokenizer
        self.parser = parser
        self.morphology = morphology
        self.embeddings = embeddings

    def parse(self, text: str) -> ParsedText:
        sentences = [
            self.parser.parse(sentence, i, self.morphology)
            for i, sentence in enumerate(self.tokenizer.tokenize(text))
        ]
        return ParsedText(sentences=sentences, vector=self.embeddings.mean_vector(self._content_words(sentences)))

    def compare(self, parsed_a: ParsedText, parsed_b: ParsedText) -> float:
        if parsed_a.vector is None or parsed_b.vector is None:
            return 0.0
        return cosine_similarity(parsed_a.vector, parsed_b.vector)

    @staticmethod
    def _content_words(sentences: List[ParsedSentence]) -> List[str]:
        words = []
        for sentence in sentences:
            for token in sentence.tokens:
                if token.form is None or IGNORED_POS.intersection(token.pos):
                    continue
                words.append((token.lemma or token.form).lower())
        return words
