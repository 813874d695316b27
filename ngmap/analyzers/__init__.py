"""Source relationship extraction engine: parse, classify, register, resolve."""

from __future__ import annotations

from .classifier import DeclarationClassifier, classify_declaration
from .parser import IOFailure, ParseFailure, SourceParser, load_source
from .registry import Registry, RegistryFrozenError
from .resolver import ComponentGraph, resolve

__all__ = [
    "ComponentGraph",
    "DeclarationClassifier",
    "IOFailure",
    "ParseFailure",
    "Registry",
    "RegistryFrozenError",
    "SourceParser",
    "classify_declaration",
    "load_source",
    "resolve",
]
