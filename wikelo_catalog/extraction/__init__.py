"""
Extraction module for turning rendered wiki HTML into structured data.

This module implements a heuristic, best-effort approach combining:
- Span-aware table expansion and header/key-value interpretation
- Prose "Key: Value" and plain list collection
- Ingredient and cost extraction for Wikelo catalog items
"""

from .cell_normalizer import CellNormalizer
from .table_parser import TableParser
from .content_parser import ContentParser
from .requirement_extractor import RequirementExtractor
from .cost_extractor import CostExtractor
from .metadata_extractor import MetadataExtractor
from .extractor import CatalogExtractor
from .data_models import (
    IngredientRequirement,
    ItemDetail,
    ItemRecord,
    KVMap,
    PageParseResult,
    RawSection,
    SectionData,
    SectionTableResult,
    TableResult,
    NOT_AVAILABLE,
    UNAVAILABLE,
)

__all__ = [
    "CellNormalizer",
    "TableParser",
    "ContentParser",
    "RequirementExtractor",
    "CostExtractor",
    "MetadataExtractor",
    "CatalogExtractor",
    "IngredientRequirement",
    "ItemDetail",
    "ItemRecord",
    "KVMap",
    "PageParseResult",
    "RawSection",
    "SectionData",
    "SectionTableResult",
    "TableResult",
    "NOT_AVAILABLE",
    "UNAVAILABLE",
]
