"""
Response schemas for the MediaWiki action API.

Every field the wiki may omit is optional with a default, so callers read
values through these models instead of probing raw dictionaries.
"""

from typing import List, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class SectionEntry(BaseModel):
    """One entry of ``parse.sections``."""
    model_config = ConfigDict(extra="ignore")

    line: str = ""
    index: Union[str, int] = ""


class ParsePayload(BaseModel):
    """The ``parse`` block of an ``action=parse`` response."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    pageid: Optional[int] = None
    displaytitle: Optional[str] = None
    # formatversion=2 returns a string, formatversion=1 returns {"*": html}
    text: Optional[Union[str, Dict[str, str]]] = None
    sections: List[SectionEntry] = Field(default_factory=list)

    def html(self) -> str:
        if isinstance(self.text, dict):
            return self.text.get("*", "")
        return self.text or ""


class ParseResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parse: Optional[ParsePayload] = None


class CategoryMember(BaseModel):
    """One entry of ``query.categorymembers``."""
    model_config = ConfigDict(extra="ignore")

    pageid: int
    title: str
    ns: Optional[int] = None


class QueryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    categorymembers: List[CategoryMember] = Field(default_factory=list)


class ContinueBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cmcontinue: Optional[str] = None


class QueryResponse(BaseModel):
    """Response of an ``action=query`` category listing."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    query: Optional[QueryPayload] = None
    continuation: Optional[ContinueBlock] = Field(default=None, alias="continue")

    def next_cursor(self) -> str:
        if self.continuation is None:
            return ""
        return self.continuation.cmcontinue or ""


class WikiPage(BaseModel):
    """Rendered HTML of a page together with its identity."""
    title: str
    pageid: Optional[int] = None
    displaytitle: Optional[str] = None
    html: str = ""
