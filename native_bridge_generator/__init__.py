"""
Native Bridge Generator - Generate typed Dart bridges from Kotlin and Swift sources
"""

from .generator import NativeBridgeGenerator
from .type_mapper import TypeMapper
from .extractors import DeclarationExtractor, KotlinExtractor, SwiftExtractor
from .merger import EntityMerger, MergeConflict, merge
from .code_generators import CodeGenerator, OutputBuilder, emit
from .models import Call, LogicalEntity, Origin, Parameter, Subscription
from .constants import (
    DART_TYPE_MAP,
    DEFAULT_CHANNEL,
    DEFAULT_EVENT_PREFIX,
)

__version__ = "0.1.0"

__all__ = [
    "NativeBridgeGenerator",
    "TypeMapper",
    "DeclarationExtractor",
    "KotlinExtractor",
    "SwiftExtractor",
    "EntityMerger",
    "MergeConflict",
    "merge",
    "CodeGenerator",
    "OutputBuilder",
    "emit",
    "Call",
    "LogicalEntity",
    "Origin",
    "Parameter",
    "Subscription",
    "DART_TYPE_MAP",
    "DEFAULT_CHANNEL",
    "DEFAULT_EVENT_PREFIX",
]
