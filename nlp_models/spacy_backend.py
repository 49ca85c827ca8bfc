"""
Tokenizer and parser backed by a spaCy pipeline saved on disk
"""
from pathlib import Path
from typing import List, Optional

import spacy
from spacy.language import Language as SpacyPipeline
from spacy.tokens import Doc

from nlp_models.base import (
    MorphologyDictionary,
    ParsedSentence,
    ParsedToken,
    Parser,
    Sentence,
    Token,
    Tokenizer,
)
from logger import get_logger

logger = get_logger(__name__)


def load_spacy_pipeline(path: Path) -> SpacyPipeline:
    """Load a pipeline saved with `nlp.to_disk()`, making sure it splits sentences"""
    nlp = spacy.load(path)
    if not nlp.has_pipe("parser") and not nlp.has_pipe("senter") and not nlp.has_pipe("sentencizer"):
        nlp.add_pipe("sentencizer", first=True)
    logger.info(f"Loaded spaCy pipeline from {path} ({', '.join(nlp.pipe_names)})")
    return nlp


class SpacyTokenizer(Tokenizer):

    def __init__(self, nlp: SpacyPipeline):
        self.nlp = nlp

    def tokenize(self, text: str) -> List[Sentence]:
        sentences = []
        for sent in self.nlp(text).sents:
            tokens = [
                Token(form=tok.text, start=tok.idx, end=tok.idx + len(tok.text) - 1)
                for tok in sent if not tok.is_space
            ]
            if tokens:
                sentences.append(Sentence(start=tokens[0].start, end=tokens[-1].end, tokens=tokens))
        return sentences


class SpacyParser(Parser):
    """Runs the pipeline components over the tokens found by another tokenizer"""

    def __init__(self, nlp: SpacyPipeline):
        self.nlp = nlp

    def parse(self, sentence: Sentence, sentence_id: int,
              morphology: Optional[MorphologyDictionary] = None) -> ParsedSentence:
        doc = Doc(self.nlp.vocab, words=[token.form for token in sentence.tokens])
        for _, component in self.nlp.pipeline:
            doc = component(doc)

        parsed_tokens = []
        for tok, source in zip(doc, sentence.tokens):
            governor = None if tok.head.i == tok.i else tok.head.i
            parsed_tokens.append(ParsedToken(
                id=tok.i,
                form=source.form,
                start=source.start,
                end=source.end,
                lemma=tok.lemma_ or None,
                pos=[tok.pos_ or tok.tag_ or "X"],
                governor=governor,
                dependencies=[tok.dep_ or "dep"]
            ))

        return ParsedSentence(id=sentence_id, start=sentence.start, end=sentence.end, tokens=parsed_tokens)
