"""
Routes of the server, bound according to the capabilities loaded
"""
from typing import List

from fastapi import FastAPI

from capabilities import CapabilityRegistry, CapabilityType
from commands import (
    CategorizeCommand,
    Command,
    CompareCommand,
    DetectLanguageCommand,
    ExtractFramesCommand,
    FindLocationsCommand,
    LabelCommand,
    MorphoCommand,
    ParseCommand,
    SummarizeCommand,
    TokenizeCommand,
)
from config import Settings
from resolver import Resolver
from routes import (
    categorize,
    compare,
    detect_language,
    frames,
    label,
    locations,
    morpho,
    parse,
    summarize,
    system,
    tokenize,
)
from logger import get_logger

logger = get_logger(__name__)


def bind_routes(app: FastAPI,
                registry: CapabilityRegistry,
                resolver: Resolver,
                app_settings: Settings) -> List[Command]:
    """
    Bind the routes of the capabilities present in the registry

    Returns:
        The commands bound, to be closed at shutdown
    """
    commands: List[Command] = []

    def bind(module, command: Command):
        app.include_router(module.build_router(command))
        commands.append(command)
        logger.info(f"Bound route: {command.name}")

    if registry.is_present(CapabilityType.LANGUAGE_DETECTOR):
        bind(detect_language, DetectLanguageCommand(registry, resolver))

    if registry.is_present(CapabilityType.TOKENIZER):
        bind(tokenize, TokenizeCommand(registry, resolver))

        if registry.is_present(CapabilityType.PARSER):
            bind(parse, ParseCommand(registry, resolver))
        if registry.is_present(CapabilityType.CLASSIFIER):
            bind(categorize, CategorizeCommand(registry, resolver))
        if registry.is_present(CapabilityType.FRAME_EXTRACTOR):
            bind(frames, ExtractFramesCommand(registry, resolver))
        if registry.is_present(CapabilityType.LABELER):
            bind(label, LabelCommand(registry, resolver))
        if registry.is_present(CapabilityType.LOCATIONS_DICTIONARY):
            bind(locations, FindLocationsCommand(registry, resolver, app_settings.locations_labeler_domain))

    if registry.is_present(CapabilityType.COMPARATOR):
        bind(compare, CompareCommand(
            registry, resolver, workers=app_settings.compare_workers, chunk_size=app_settings.compare_chunk_size
        ))

    if registry.is_present(CapabilityType.SUMMARIZER):
        bind(summarize, SummarizeCommand(registry, resolver))

    if registry.is_present(CapabilityType.MORPHO_ANALYZER):
        bind(morpho, MorphoCommand(registry, resolver))

    app.include_router(system.build_router(registry, app_settings))

    return commands
