"""
Naming convention of the model resources

Each file (or directory) of a per-language or per-domain collection is named
after the key it serves, either as its whole name or as the suffix following
the key delimiter: 'en.bin', 'tokenizer__en.bin' and 'tokenizer__en' all
yield 'en'.
"""
from pathlib import Path
from typing import Dict, List

from exceptions import ConfigurationError
from language import is_iso_code


def key_from_path(path: Path, delimiter: str = "__") -> str:
    """Extract the key encoded in the name of a resource"""
    name = path.name if path.is_dir() else path.stem
    if delimiter in name:
        name = name.rsplit(delimiter, 1)[1]
    if not name:
        raise ConfigurationError(f"Cannot extract a key from the resource name '{path.name}'")
    return name


def language_key(path: Path, delimiter: str = "__") -> str:
    """Extract an ISO 639-1 language code from the name of a resource"""
    code = key_from_path(path, delimiter).lower()
    if not is_iso_code(code):
        raise ConfigurationError(f"Invalid language code '{code}' in the resource name '{path.name}'")
    return code


def list_resources(directory: Path) -> List[Path]:
    """
    List the resources of a configured directory, sorted by name

    Raises:
        ConfigurationError: If the directory does not exist, is not a directory or is empty
    """
    directory = Path(directory)
    if not directory.exists():
        raise ConfigurationError(f"The directory '{directory}' does not exist")
    if not directory.is_dir():
        raise ConfigurationError(f"'{directory}' is not a directory")

    resources = sorted(p for p in directory.iterdir() if not p.name.startswith("."))
    if not resources:
        raise ConfigurationError(f"The directory '{directory}' is empty")

    return resources


def keyed_resources(directory: Path, by_language: bool, delimiter: str = "__") -> Dict[str, Path]:
    """Map each key of a directory to its resource, failing on duplicated keys"""
    extract = language_key if by_language else key_from_path
    resources: Dict[str, Path] = {}

    for path in list_resources(directory):
        key = extract(path, delimiter)
        if key in resources:
            raise ConfigurationError(
                f"Duplicated key '{key}' in '{directory}': {resources[key].name}, {path.name}"
            )
        resources[key] = path

    return resources
