"""
Tests for the text comparison
"""
import pytest

from capabilities import CapabilityType
from commands import CompareCommand, parse_comparing
from exceptions import BlankText, InvalidParameter, LanguageNotSupported
from nlp_models import TextComparator
from nlp_models.embeddings import WordEmbeddings, cosine_similarity
from resolver import Resolver

COMPARING = {
    1: "A cat sleeps.",
    2: "The dog barks.",
    3: "Stock market.",
}


class ConstantComparator(TextComparator):
    """Scores every text the same"""

    def parse(self, text):
        return text

    def compare(self, parsed_a, parsed_b):
        return 0.5


@pytest.fixture
def make_command(full_registry):
    commands = []

    def _make(chunk_size=50, workers=4):
        command = CompareCommand(full_registry, Resolver(full_registry), workers=workers, chunk_size=chunk_size)
        commands.append(command)
        return command

    yield _make

    for command in commands:
        command.close()


class TestEmbeddings:

    def test_cosine_similarity(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0]) == pytest.approx(1.0)
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    def test_mean_vector(self):
        embeddings = WordEmbeddings({"a": [1.0, 0.0], "b": [0.0, 1.0]})

        assert embeddings.mean_vector(["a", "b", "unknown"]).tolist() == [0.5, 0.5]
        assert embeddings.mean_vector(["unknown"]) is None


class TestCompareCommand:
    """Tests for the comparison of a text with many others"""

    def test_sorted_by_descending_score(self, make_command):
        results = make_command()("The cat sleeps.", COMPARING, lang="en")

        assert [r["id"] for r in results] == [1, 2, 3]
        scores = [r["score"] for r in results]
        assert scores == sorted(scores, reverse=True)
        assert scores[0] == pytest.approx(1.0)

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 50])
    def test_independent_of_chunk_size(self, make_command, chunk_size):
        expected = make_command(chunk_size=50, workers=1)("The cat sleeps.", COMPARING, lang="en")

        assert make_command(chunk_size=chunk_size)("The cat sleeps.", COMPARING, lang="en") == expected

    def test_ties_broken_by_id(self, full_registry, make_command):
        command = make_command(chunk_size=1)
        items = [(5, "a"), (2, "b"), (9, "c"), (1, "d")]

        scores = command.compare(ConstantComparator(), "base", items)

        assert [text_id for text_id, _ in scores] == [1, 2, 5, 9]

    def test_detected_language(self, make_command):
        results = make_command()("The cat sleeps.", COMPARING)
        assert {r["id"] for r in results} == {1, 2, 3}

    def test_language_without_comparator(self, make_command):
        with pytest.raises(LanguageNotSupported, match="fr"):
            make_command()("The cat sleeps.", COMPARING, lang="fr")

    def test_blank_comparing_text(self, make_command):
        with pytest.raises(BlankText):
            make_command()("The cat sleeps.", {1: "A cat.", 2: " "}, lang="en")

    def test_empty_comparing_set(self, make_command):
        assert make_command()("The cat sleeps.", {}, lang="en") == []

    def test_comparator_is_shared(self, full_registry):
        comparators = full_registry[CapabilityType.COMPARATOR]
        assert comparators.get("en") is comparators.get("en")


class TestParseComparing:

    def test_valid(self):
        assert parse_comparing([{"id": 1, "text": "a"}, {"id": 2, "text": "b"}]) == {1: "a", 2: "b"}

    def test_duplicated_ids(self):
        with pytest.raises(InvalidParameter, match="duplicated ids: 1"):
            parse_comparing([{"id": 1, "text": "a"}, {"id": 1, "text": "b"}])

    def test_missing_text(self):
        with pytest.raises(InvalidParameter, match="comparing"):
            parse_comparing([{"id": 1}])

    def test_not_a_list(self):
        with pytest.raises(InvalidParameter):
            parse_comparing("nope")
