"""
Capabilities of the server and the registry that loads them
"""
from capabilities.capability import (
    ABSENT,
    Absent,
    Capability,
    CapabilityType,
    Keyed,
    KeyKind,
    Single,
    derive,
    intersect_keys,
)
from capabilities.loaders import LoaderRegistry, Resource
from capabilities.registry import (
    BoundSummarizer,
    CapabilityRegistry,
    RegistryBuilder,
    build_registry,
)

__all__ = [
    "ABSENT",
    "Absent",
    "Capability",
    "CapabilityType",
    "Keyed",
    "KeyKind",
    "Single",
    "derive",
    "intersect_keys",
    "LoaderRegistry",
    "Resource",
    "BoundSummarizer",
    "CapabilityRegistry",
    "RegistryBuilder",
    "build_registry",
]
