import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import BaseModel, ValidationError

from config import config
from wikelo_catalog.crawler.api_models import (
    CategoryMember,
    ParsePayload,
    ParseResponse,
    QueryResponse,
    WikiPage,
)
from wikelo_catalog.extraction.data_models import RawSection
from wikelo_catalog.extraction.metadata_extractor import MetadataExtractor

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A wiki request failed, timed out or returned something unusable."""

    def __init__(self, message: str, params: Optional[Dict[str, Any]] = None, status: Optional[int] = None):
        super().__init__(message)
        self.params = dict(params or {})
        self.status = status


class WikiClient:
    """Read-only async client for the MediaWiki action API."""

    def __init__(self,
                 api_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 user_agent: Optional[str] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        :param api_url: Full URL of api.php
        :param timeout: Total seconds allowed per request
        :param user_agent: User-Agent header sent with every request
        :param session: Existing session to reuse; it is not closed by this client
        """
        self.api_url = api_url or config.WIKI_API_URL
        self.timeout = aiohttp.ClientTimeout(total=timeout if timeout is not None else config.REQUEST_TIMEOUT)
        self.user_agent = user_agent or config.USER_AGENT
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "WikiClient":
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(headers={"User-Agent": self.user_agent})
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def fetch_json(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Performs one GET against the API and returns the decoded JSON body.

        :param params: Query parameters; format and formatversion are added
        :return: Decoded response object
        :raises FetchError: On any network, HTTP, decoding or API-level failure
        """
        query = {"format": "json", "formatversion": "2"}
        query.update({key: str(value) for key, value in params.items()})

        session = self._ensure_session()
        logger.debug(f"GET {self.api_url} {query}")

        try:
            async with session.get(self.api_url, params=query, timeout=self.timeout) as response:
                if response.status != 200:
                    raise FetchError(f"Wiki request failed: {response.status}", query, response.status)
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise FetchError(f"Wiki request timed out after {self.timeout.total}s", query) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Wiki request failed: {e}", query) from e
        except ValueError as e:
            raise FetchError("Wiki returned a response that is not JSON", query) from e

        if not isinstance(data, dict):
            raise FetchError("Wiki returned a malformed response", query)

        error = data.get("error")
        if error:
            info = error.get("info") if isinstance(error, dict) else error
            raise FetchError(f"Wiki API error: {info}", query)

        return data

    @staticmethod
    def _validate(model: type, data: Dict[str, Any], params: Dict[str, Any]) -> BaseModel:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise FetchError(f"Wiki returned a malformed response: {e}", params) from e

    async def _parse(self, params: Dict[str, Any]) -> ParsePayload:
        params = {"action": "parse", **params}
        response = self._validate(ParseResponse, await self.fetch_json(params), params)
        if response.parse is None:
            raise FetchError("Wiki response has no parse block", params)
        return response.parse

    async def list_sections(self, page: str) -> List[RawSection]:
        """
        Lists the sections of a page in page order.

        :param page: Page title
        :return: RawSection per section
        """
        payload = await self._parse({"page": page, "prop": "sections"})
        return [
            RawSection(name=MetadataExtractor.display_title(entry.line), index=str(entry.index))
            for entry in payload.sections
        ]

    async def fetch_section_html(self, page: str, section: str) -> str:
        """
        Fetches the rendered HTML of one section.

        :param page: Page title
        :param section: Section index as listed by list_sections
        :return: HTML string, empty if the wiki returned no text
        """
        payload = await self._parse({"page": page, "section": section, "prop": "text"})
        return payload.html()

    async def fetch_page(self, title: Optional[str] = None, pageid: Optional[int] = None) -> WikiPage:
        """
        Fetches the rendered HTML and display title of a whole page.

        :param title: Page title
        :param pageid: Page id, used when no title is given
        :return: WikiPage
        """
        if title:
            params: Dict[str, Any] = {"page": title}
        elif pageid is not None:
            params = {"pageid": pageid}
        else:
            raise ValueError("fetch_page needs a title or a pageid")

        params.update({"prop": "text|displaytitle", "redirects": "1"})
        payload = await self._parse(params)

        return WikiPage(
            title=payload.title or title or "",
            pageid=payload.pageid if payload.pageid is not None else pageid,
            displaytitle=payload.displaytitle,
            html=payload.html()
        )

    async def list_category_members(self, category: str, limit: int = 50) -> List[CategoryMember]:
        """
        Lists every member of a category, following continuation cursors.

        :param category: Category title including the "Category:" prefix
        :param limit: Page size requested per call
        :return: CategoryMember per page, in listing order
        """
        members: List[CategoryMember] = []
        cursor = ""

        while True:
            params: Dict[str, Any] = {
                "action": "query",
                "list": "categorymembers",
                "cmtitle": category,
                "cmlimit": limit,
            }
            if cursor:
                params["cmcontinue"] = cursor

            response = self._validate(QueryResponse, await self.fetch_json(params), params)
            if response.query is not None:
                members.extend(response.query.categorymembers)

            cursor = response.next_cursor()
            if not cursor:
                break

        logger.info(f"Found {len(members)} members in {category}")
        return members
