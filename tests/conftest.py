"""
Shared fixtures: model directories on disk, fake loaders and test clients
"""
import os

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient

from app import create_app
from capabilities import LoaderRegistry, Resource, build_registry
from config import Settings
from fakes import (
    FakeClassifier,
    FakeFrameExtractor,
    FakeFrequencyDictionary,
    FakeLabeler,
    FakeLanguageDetector,
    FakeLocationsDictionary,
    FakeMorphology,
    FakeParser,
    FakeSummarizer,
    FakeTokenizer,
)

# Vectors of the words used in the comparison tests
EMBEDDINGS = """6 3
cat 1.0 0.0 0.0
sleeps 0.9 0.1 0.0
dog 0.7 0.3 0.0
barks 0.5 0.5 0.0
stock 0.0 0.0 1.0
market 0.0 0.1 0.9
"""

CLASSIFIER_SCORES = {
    "news": [0.1, 0.7, 0.2],
    "sports": [0.6, 0.3, 0.1],
}


def write_files(directory, names, content="model"):
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def model_paths(tmp_path):
    """One configured path per capability, laid out with the key naming convention"""
    paths = {
        "language_detector_model": tmp_path / "detector.bin",
        "cjk_tokenizer_model": tmp_path / "cjk.bin",
        "frequency_dictionary": tmp_path / "frequencies.bin",
        "tokenizer_models_dir": write_files(tmp_path / "tokenizers", ["tokenizer__en.bin", "tokenizer__fr.bin"]),
        "parser_models_dir": write_files(tmp_path / "parsers", ["en.bin", "fr.bin"]),
        "morphology_dictionaries_dir": write_files(tmp_path / "morphology", ["morpho__en.bin"]),
        "word_embeddings_dir": write_files(tmp_path / "embeddings", ["words__en.txt", "words__fr.txt"], EMBEDDINGS),
        "classifier_models_dir": write_files(tmp_path / "classifiers", ["han__news.bin", "han__sports.bin"]),
        "classifier_embeddings_dir": write_files(
            tmp_path / "classifier_embeddings", ["news.txt", "sports.txt"], EMBEDDINGS
        ),
        "frame_extractor_models_dir": write_files(tmp_path / "frames", ["travel.bin"]),
        "labeler_models_dir": write_files(tmp_path / "labelers", ["places.bin"]),
        "locations_dictionary": tmp_path / "locations.bin",
        "summarizer_model": tmp_path / "summarizer.bin",
        "lemmas_blacklist_dir": tmp_path / "blacklists",
    }
    for name in ["language_detector_model", "cjk_tokenizer_model", "frequency_dictionary",
                 "locations_dictionary", "summarizer_model"]:
        paths[name].write_text("model", encoding="utf-8")

    paths["lemmas_blacklist_dir"].mkdir()
    (paths["lemmas_blacklist_dir"] / "en.txt").write_text("# stop lemmas\nthe\na\n", encoding="utf-8")

    return paths


@pytest.fixture
def make_settings(model_paths):
    """Build settings with the given capabilities configured"""
    def _make(*capabilities, **overrides):
        values = {name: model_paths[name] for name in capabilities}
        values.update(overrides)
        return Settings(_env_file=None, log_to_file=False, **values)
    return _make


@pytest.fixture
def full_settings(make_settings, model_paths):
    return make_settings(*model_paths.keys(), locations_labeler_domain="places", compare_chunk_size=2)


@pytest.fixture
def fake_loaders():
    """Loaders building fake models, except word embeddings which are read for real"""
    loaders = LoaderRegistry()
    loaders.register(Resource.LANGUAGE_DETECTOR, lambda path: FakeLanguageDetector())
    loaders.register(Resource.CJK_TOKENIZER, lambda path: FakeTokenizer())
    loaders.register(Resource.FREQUENCY_DICTIONARY, lambda path: FakeFrequencyDictionary())
    loaders.register(Resource.TOKENIZER, lambda path: FakeTokenizer())
    loaders.register(Resource.PARSER, lambda path: FakeParser())
    loaders.register(Resource.MORPHOLOGY, lambda path: FakeMorphology())
    loaders.register(Resource.CLASSIFIER, lambda path: FakeClassifier(CLASSIFIER_SCORES[path.stem.split("__")[-1]]))
    loaders.register(Resource.FRAME_EXTRACTOR, lambda path: FakeFrameExtractor())
    loaders.register(Resource.FRAME_EXTRACTOR_EMBEDDINGS, lambda path: {})
    loaders.register(Resource.LABELER, lambda path: FakeLabeler())
    loaders.register(Resource.LOCATIONS_DICTIONARY, lambda path: FakeLocationsDictionary())
    loaders.register(Resource.SUMMARIZER, lambda path: FakeSummarizer())
    return loaders


@pytest.fixture
def build(fake_loaders):
    """Build a registry with the fake loaders"""
    def _build(settings):
        return build_registry(settings, fake_loaders)
    return _build


@pytest.fixture
def full_registry(build, full_settings):
    return build(full_settings)


@pytest.fixture
def make_client(build):
    """Create a test client serving the capabilities of the given settings"""
    clients = []

    def _make(settings, registry=None):
        app = create_app(registry or build(settings), settings)
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, full_settings):
    return make_client(full_settings)
