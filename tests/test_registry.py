"""
Tests for the capability registry: key convention, loading and derivation
"""
import pickle

import pytest
import spacy

from capabilities import (
    ABSENT,
    BoundSummarizer,
    CapabilityType,
    Keyed,
    KeyKind,
    LoaderRegistry,
    Resource,
    Single,
    build_registry,
    derive,
    intersect_keys,
)
from capabilities.keys import key_from_path, keyed_resources, language_key, list_resources
from capabilities.loaders import (
    load_embeddings,
    load_lemmas_blacklist,
    load_parser,
    load_serialized,
    load_tokenizer,
)
from config import Settings
from exceptions import ConfigurationError, MissingAuxiliaryResource
from nlp_models import Parser, Token, Tokenizer
from nlp_models.comparator import EmbeddingsTextComparator
from nlp_models.spacy_backend import SpacyParser, SpacyTokenizer
from fakes import FakeClassifier, FakeTokenizer


# ==================== Key Convention Tests ====================

class TestKeyConvention:
    """Tests for the extraction of the keys from the resource names"""

    def test_key_is_whole_stem(self, tmp_path):
        assert key_from_path(tmp_path / "en.bin") == "en"

    def test_key_is_suffix_after_last_delimiter(self, tmp_path):
        assert key_from_path(tmp_path / "tokenizer__v2__en.bin") == "en"
        assert key_from_path(tmp_path / "news__sports.model") == "sports"

    def test_custom_delimiter(self, tmp_path):
        assert key_from_path(tmp_path / "tokenizer-en.bin", delimiter="-") == "en"

    def test_directory_key(self, tmp_path):
        directory = tmp_path / "pipeline__en"
        directory.mkdir()
        assert key_from_path(directory) == "en"

    def test_language_key_lower_case(self, tmp_path):
        assert language_key(tmp_path / "tokenizer__EN.bin") == "en"

    def test_language_key_unknown_code(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Invalid language code 'xx'"):
            language_key(tmp_path / "tokenizer__xx.bin")

    def test_empty_key(self, tmp_path):
        with pytest.raises(ConfigurationError):
            key_from_path(tmp_path / "tokenizer__.bin")


class TestListResources:
    """Tests for the listing of the configured directories"""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            list_resources(tmp_path / "missing")

    def test_not_a_directory(self, tmp_path):
        path = tmp_path / "file.bin"
        path.write_text("x")
        with pytest.raises(ConfigurationError, match="is not a directory"):
            list_resources(path)

    def test_empty_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="is empty"):
            list_resources(tmp_path)

    def test_hidden_files_ignored_and_sorted(self, tmp_path):
        for name in ["fr.bin", ".DS_Store", "en.bin"]:
            (tmp_path / name).write_text("x")

        assert [p.name for p in list_resources(tmp_path)] == ["en.bin", "fr.bin"]

    def test_only_hidden_files_is_empty(self, tmp_path):
        (tmp_path / ".gitkeep").write_text("")
        with pytest.raises(ConfigurationError, match="is empty"):
            list_resources(tmp_path)

    def test_duplicated_keys(self, tmp_path):
        (tmp_path / "en.bin").write_text("x")
        (tmp_path / "tokenizer__en.bin").write_text("x")

        with pytest.raises(ConfigurationError, match="Duplicated key 'en'"):
            keyed_resources(tmp_path, by_language=True)

    def test_domain_keys_are_not_validated(self, tmp_path):
        (tmp_path / "classifier__Sports.bin").write_text("x")
        assert list(keyed_resources(tmp_path, by_language=False)) == ["Sports"]


# ==================== Capability Tests ====================

class TestCapabilities:
    """Tests for the capability variants and the derivation combinator"""

    def test_absent(self):
        assert ABSENT.is_present is False
        assert ABSENT.keys() == frozenset()

    def test_keyed_is_read_only(self):
        keyed = Keyed({"en": object()}, KeyKind.LANGUAGE)

        with pytest.raises(TypeError):
            keyed.models["fr"] = object()

    def test_keyed_copies_its_models(self):
        models = {"en": 1}
        keyed = Keyed(models, KeyKind.LANGUAGE)
        models["fr"] = 2

        assert keyed.keys() == {"en"}

    def test_empty_keyed_is_not_present(self):
        assert Keyed({}, KeyKind.DOMAIN).is_present is False

    def test_intersect_keys(self):
        a = Keyed({"en": 1, "fr": 2, "it": 3}, KeyKind.LANGUAGE)
        b = Keyed({"en": 1, "it": 3}, KeyKind.LANGUAGE)

        assert intersect_keys(a, b) == {"en", "it"}

    def test_intersect_with_absent(self):
        a = Keyed({"en": 1}, KeyKind.LANGUAGE)
        assert intersect_keys(a, ABSENT) is None

    def test_intersect_with_single(self):
        a = Keyed({"en": 1}, KeyKind.LANGUAGE)
        assert intersect_keys(a, Single(object())) is None

    def test_derive(self):
        a = Keyed({"en": 1, "fr": 2}, KeyKind.LANGUAGE)
        b = Keyed({"en": 10, "it": 30}, KeyKind.LANGUAGE)

        derived = derive([a, b], factory=lambda key: a.get(key) + b.get(key))

        assert isinstance(derived, Keyed)
        assert dict(derived.models) == {"en": 11}

    def test_derive_absent_prerequisite(self):
        a = Keyed({"en": 1}, KeyKind.LANGUAGE)
        assert derive([a, ABSENT], factory=lambda key: key) is ABSENT

    def test_derive_empty_intersection(self):
        a = Keyed({"en": 1}, KeyKind.LANGUAGE)
        b = Keyed({"fr": 1}, KeyKind.LANGUAGE)
        assert derive([a, b], factory=lambda key: key) is ABSENT


# ==================== Loader Tests ====================

class TestLoaders:
    """Tests for the built-in loaders"""

    def test_builtin_loaders_registered(self):
        loaders = LoaderRegistry()
        assert set(loaders.list_resources()) == {resource.value for resource in Resource}

    def test_register_not_callable(self):
        with pytest.raises(ValueError):
            LoaderRegistry().register(Resource.TOKENIZER, "not a loader")

    def test_load_serialized(self, tmp_path):
        path = tmp_path / "tokenizer__en.bin"
        path.write_bytes(pickle.dumps(FakeTokenizer()))

        assert isinstance(load_serialized(path, Tokenizer), FakeTokenizer)

    def test_load_serialized_wrong_type(self, tmp_path):
        path = tmp_path / "parser__en.bin"
        path.write_bytes(pickle.dumps(FakeTokenizer()))

        with pytest.raises(ConfigurationError, match="expected a Parser"):
            load_serialized(path, Parser)

    def test_load_corrupted_file(self, tmp_path):
        path = tmp_path / "tokenizer__en.bin"
        path.write_bytes(b"not a pickle")

        with pytest.raises(ConfigurationError, match="Cannot load tokenizer 'en'"):
            LoaderRegistry().load(Resource.TOKENIZER, path, "en")

    def test_load_lemmas_blacklist(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("# comment\nthe\n\n  a  \n", encoding="utf-8")

        assert load_lemmas_blacklist(path) == frozenset({"the", "a"})

    def test_load_embeddings(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("2 2\ncat 1.0 0.0\ndog 0.5 0.5\n", encoding="utf-8")

        embeddings = load_embeddings(path)

        assert len(embeddings) == 2
        assert embeddings.dimension == 2
        assert embeddings.get("dog").tolist() == [0.5, 0.5]
        assert "bird" not in embeddings

    def test_load_embeddings_inconsistent_size(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("cat 1.0 0.0\ndog 0.5\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="expected 2 components"):
            load_embeddings(path)

    def test_load_embeddings_tab_separated(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("cat\t1.0\t0.0\ndog\t0.9\t0.1\nstock\t0.0\t1.0\n", encoding="utf-8")

        embeddings = load_embeddings(path)

        assert list(embeddings) == ["cat", "dog", "stock"]
        assert embeddings.dimension == 2
        assert embeddings.mean_vector(["cat"]).tolist() == [1.0, 0.0]

    def test_load_embeddings_without_components(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("cat\ndog\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="no components for 'cat'"):
            load_embeddings(path)

    def test_load_embeddings_not_a_number(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("cat 1.0 x\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="en.txt:1"):
            load_embeddings(path)

    def test_load_empty_embeddings(self, tmp_path):
        path = tmp_path / "en.txt"
        path.write_text("\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="no vectors found"):
            load_embeddings(path)

    @pytest.mark.parametrize("content", [
        b"cmissing_module_of_models\nTokenizer\n.",
        b"cbuiltins\nmissing_class_of_models\n.",
    ])
    def test_load_pickle_of_unknown_class(self, tmp_path, content):
        path = tmp_path / "tokenizer__en.bin"
        path.write_bytes(content)

        with pytest.raises(ConfigurationError, match="Cannot load tokenizer 'en'"):
            LoaderRegistry().load(Resource.TOKENIZER, path, "en")


# ==================== spaCy Backend Tests ====================

class TestSpacyBackend:
    """Tests for the tokenizers and parsers served from spaCy pipeline directories"""

    @pytest.fixture
    def pipeline_dir(self, tmp_path):
        path = tmp_path / "models" / "pipeline__en"
        path.parent.mkdir(parents=True, exist_ok=True)
        spacy.blank("en").to_disk(path)
        return path

    def test_tokenize(self, pipeline_dir):
        tokenizer = load_tokenizer(pipeline_dir)

        sentences = tokenizer.tokenize("Hello world. How are you?")

        assert isinstance(tokenizer, SpacyTokenizer)
        assert [[t.form for t in s.tokens] for s in sentences] == [
            ["Hello", "world", "."],
            ["How", "are", "you", "?"],
        ]
        assert sentences[0].tokens[0] == Token(form="Hello", start=0, end=4)
        assert (sentences[0].start, sentences[0].end) == (0, 11)
        assert (sentences[1].start, sentences[1].end) == (13, 24)

    def test_parse(self, pipeline_dir):
        tokenizer = load_tokenizer(pipeline_dir)
        parser = load_parser(pipeline_dir)
        sentence = tokenizer.tokenize("Hello world.")[0]

        parsed = parser.parse(sentence, 3)

        assert isinstance(parser, SpacyParser)
        assert parsed.id == 3
        assert [t.id for t in parsed.tokens] == [0, 1, 2]
        assert [t.form for t in parsed.tokens] == ["Hello", "world", "."]
        assert parsed.tokens[1].start == 6
        # A pipeline without a dependency parser leaves every token as a root
        assert all(t.governor is None for t in parsed.tokens)

    def test_registry_from_pipeline_directories(self, pipeline_dir):
        settings = Settings(
            _env_file=None, log_to_file=False,
            tokenizer_models_dir=pipeline_dir.parent, parser_models_dir=pipeline_dir.parent
        )

        registry = build_registry(settings)

        assert registry.key_sets()["tokenizer"] == ["en"]
        assert registry.key_sets()["parser"] == ["en"]
        assert isinstance(registry[CapabilityType.TOKENIZER].get("en"), SpacyTokenizer)


# ==================== Registry Tests ====================

class TestRegistryBuilder:
    """Tests for the registry built from the settings"""

    def test_nothing_configured(self, build, make_settings):
        registry = build(make_settings())

        for capability_type in CapabilityType:
            assert registry[capability_type] is ABSENT

    def test_full_key_sets(self, full_registry):
        keys = full_registry.key_sets()

        assert keys["language_detector"] == []
        assert keys["tokenizer"] == ["en", "fr"]
        assert keys["parser"] == ["en", "fr"]
        assert keys["morphology"] == ["en"]
        assert keys["word_embeddings"] == ["en", "fr"]
        assert keys["classifier"] == ["news", "sports"]
        assert keys["frame_extractor"] == ["travel"]
        assert keys["labeler"] == ["places"]
        assert keys["locations_dictionary"] == []
        assert keys["summarizer"] == ["en", "fr"]
        assert keys["comparator"] == ["en"]
        assert keys["morpho_analyzer"] == ["en"]

    def test_deterministic_keys(self, build, full_settings):
        assert build(full_settings).key_sets() == build(full_settings).key_sets()

    def test_language_detector_resources_attached(self, full_registry):
        detector = full_registry[CapabilityType.LANGUAGE_DETECTOR].model

        assert isinstance(detector.cjk_tokenizer, FakeTokenizer)
        assert detector.frequency_dictionary is not None

    def test_comparator_absent_without_embeddings(self, build, make_settings):
        settings = make_settings("tokenizer_models_dir", "parser_models_dir", "morphology_dictionaries_dir")
        registry = build(settings)

        assert registry[CapabilityType.COMPARATOR] is ABSENT
        assert registry.is_present(CapabilityType.MORPHO_ANALYZER)

    def test_comparator_built_by_default_factory(self, full_registry):
        comparator = full_registry[CapabilityType.COMPARATOR].get("en")
        assert isinstance(comparator, EmbeddingsTextComparator)

    def test_classifier_embeddings_merged(self, full_registry):
        classifier = full_registry[CapabilityType.CLASSIFIER].get("news")
        assert classifier.embeddings.get("cat").tolist() == [1.0, 0.0, 0.0]

    def test_missing_auxiliary_embeddings(self, build, make_settings, model_paths):
        (model_paths["classifier_embeddings_dir"] / "sports.txt").unlink()
        settings = make_settings("classifier_models_dir", "classifier_embeddings_dir")

        with pytest.raises(MissingAuxiliaryResource, match="Missing classifier_embeddings for 'sports'"):
            build(settings)

    def test_empty_configured_directory_is_fatal(self, build, make_settings, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()

        with pytest.raises(ConfigurationError, match="is empty"):
            build(make_settings(tokenizer_models_dir=empty))

    def test_missing_configured_directory_is_fatal(self, build, make_settings, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            build(make_settings(labeler_models_dir=tmp_path / "nowhere"))

    def test_summarizer_lemmas_blacklist(self, full_registry):
        summarizers = full_registry[CapabilityType.SUMMARIZER]

        assert isinstance(summarizers.get("en"), BoundSummarizer)
        assert summarizers.get("en").ignore_lemmas == frozenset({"the", "a"})
        assert summarizers.get("fr").ignore_lemmas == frozenset()

    def test_summarizer_requires_parser(self, build, make_settings):
        registry = build(make_settings("tokenizer_models_dir", "summarizer_model"))
        assert registry[CapabilityType.SUMMARIZER] is ABSENT

    def test_custom_loader(self, build, make_settings, fake_loaders):
        fake_loaders.register(Resource.CLASSIFIER, lambda path: FakeClassifier([1.0]))
        registry = build(make_settings("classifier_models_dir"))

        assert registry[CapabilityType.CLASSIFIER].get("sports").scores == [1.0]
