"""
Word embeddings in the plain text format (word2vec / GloVe style)
"""
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

import numpy as np


class WordEmbeddings:
    """Read-only map from a word to its vector, stored as one row per word"""

    def __init__(self, vectors: Mapping[str, Sequence[float]]):
        self._index: Dict[str, int] = {word: row for row, word in enumerate(vectors)}
        if vectors:
            self._matrix = np.array([vectors[word] for word in self._index], dtype=np.float32)
        else:
            self._matrix = np.zeros((0, 0), dtype=np.float32)
        self._matrix.setflags(write=False)

    @property
    def dimension(self) -> int:
        return self._matrix.shape[1]

    def get(self, word: str) -> Optional[np.ndarray]:
        row = self._index.get(word)
        return self._matrix[row] if row is not None else None

    def __contains__(self, word: str) -> bool:
        return word in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def mean_vector(self, words: Sequence[str]) -> Optional[np.ndarray]:
        """Average of the vectors of the known words, None if no word is known"""
        rows = [self._index[w] for w in words if w in self._index]
        if not rows:
            return None
        return self._matrix[rows].mean(axis=0)

    @classmethod
    def load(cls, path: Path) -> "WordEmbeddings":
        """
        Load embeddings from a text file, one word per line followed by its components

        Fields are separated by any whitespace. An optional first line
        '<count> <dimension>' is skipped.

        Raises:
            ValueError: If a vector is empty, has a different size than the first one
                or contains a component that is not a number
        """
        words: List[str] = []
        rows: List[np.ndarray] = []
        dimension = None

        with open(path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                parts = line.split()
                if not parts:
                    continue
                if line_number == 1 and len(parts) == 2 and all(p.isdigit() for p in parts):
                    continue

                word, values = parts[0], parts[1:]
                if not values:
                    raise ValueError(f"{path}:{line_number}: no components for '{word}'")
                if dimension is None:
                    dimension = len(values)
                elif len(values) != dimension:
                    raise ValueError(
                        f"{path}:{line_number}: expected {dimension} components, found {len(values)}"
                    )
                try:
                    rows.append(np.asarray(values, dtype=np.float32))
                except ValueError as e:
                    raise ValueError(f"{path}:{line_number}: {e}") from e
                words.append(word)

        if not words:
            raise ValueError(f"{path}: no vectors found")

        return cls(dict(zip(words, rows)))


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two vectors, 0.0 when one of them is null"""
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:
        return 0.0
    return float(np.dot(a, b) / norm)
