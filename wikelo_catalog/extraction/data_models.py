"""
Data models for the extraction module.

Defines the structure of parsed wiki tables, per-section page data and
catalog item records.
"""

from typing import List, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# Sentinel used when no cost could be extracted
NOT_AVAILABLE = "N/A"

# Sentinel used when the detail page of an item could not be fetched
UNAVAILABLE = "Unavailable"

# A key maps to a single value, or to every value seen in order once it recurs
KVValue = Union[str, List[str]]
KVMap = Dict[str, KVValue]


class RawSection(BaseModel):
    """A named, indexable subsection of a wiki page."""
    model_config = ConfigDict(frozen=True)

    name: str
    index: str


class TableResult(BaseModel):
    """Row objects recovered from one HTML table."""
    caption: str = ""
    headers: List[str] = Field(default_factory=list)
    rows: List[Dict[str, str]] = Field(default_factory=list)


class SectionTableResult(TableResult):
    """A table tagged with the section it was found in."""
    section: str


class SectionData(BaseModel):
    """Plain data extracted from the HTML of a single section."""
    kv: KVMap = Field(default_factory=dict)
    tables: List[TableResult] = Field(default_factory=list)
    lists: List[List[str]] = Field(default_factory=list)


class PageParseResult(BaseModel):
    """Structured data for a whole page, per section and flattened."""
    page: str
    kv: KVMap = Field(default_factory=dict)
    tables: List[SectionTableResult] = Field(default_factory=list)
    sections: Dict[str, SectionData] = Field(default_factory=dict)


class IngredientRequirement(BaseModel):
    """One required item and how many of it are needed."""
    name: str
    quantity: int = Field(default=1, ge=1)


class ItemRecord(BaseModel):
    """A catalog item.

    Starts life as a stub built from a landing-page row (where ``image`` may
    still be empty) and is refined into a final record from the item's own
    page.
    """
    id: Union[int, str]
    title: str
    image: str = ""
    cost: str = NOT_AVAILABLE
    ingredients: List[IngredientRequirement] = Field(default_factory=list)
    url: str = ""


class ItemDetail(BaseModel):
    """Fields recovered from an item's own page."""
    pageid: Optional[int] = None
    title: Optional[str] = None
    image: Optional[str] = None
    cost: str = NOT_AVAILABLE
    ingredients: List[IngredientRequirement] = Field(default_factory=list)
