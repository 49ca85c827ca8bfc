"""
Commands implementing the capabilities of the server
"""
from commands.base import Command, check_text, cut_text
from commands.categorize import CategorizeCommand
from commands.compare import CompareCommand, parse_comparing
from commands.detect_language import DetectLanguageCommand
from commands.frames import ExtractFramesCommand
from commands.label import LabelCommand
from commands.locations import FindLocationsCommand, parse_candidates
from commands.morpho import MorphoCommand
from commands.parse import ParseCommand, ParseResult
from commands.summarize import SummarizeCommand
from commands.tokenize import TokenizeCommand

__all__ = [
    "Command",
    "check_text",
    "cut_text",
    "CategorizeCommand",
    "CompareCommand",
    "parse_comparing",
    "DetectLanguageCommand",
    "ExtractFramesCommand",
    "LabelCommand",
    "FindLocationsCommand",
    "parse_candidates",
    "MorphoCommand",
    "ParseCommand",
    "ParseResult",
    "SummarizeCommand",
    "TokenizeCommand",
]
