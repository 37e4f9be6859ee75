"""Project names listed on an AUR maintainer search page."""

from __future__ import annotations

from html.parser import HTMLParser
from urllib.parse import quote
from typing import List

import aiohttp

from constants import Constants
from common.http_client import get_text


class _ResultsTableParser(HTMLParser):
    """Collects the link text of the first cell of each ``.results`` row."""

    def __init__(self) -> None:
        super().__init__()
        self.names: List[str] = []
        self._table_depth = 0
        self._in_results = False
        self._results_depth = 0
        self._cell_index = -1
        self._in_cell = False
        self._in_link = False
        self._text: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag == "table":
            self._table_depth += 1
            classes = (dict(attrs).get("class") or "").split()
            if not self._in_results and "results" in classes:
                self._in_results = True
                self._results_depth = self._table_depth
            return
        if not self._in_results:
            return
        if tag == "tr":
            self._cell_index = -1
        elif tag == "td":
            self._cell_index += 1
            self._in_cell = True
        elif tag == "a" and self._in_cell and self._cell_index == 0:
            self._in_link = True
            self._text = []

    def handle_endtag(self, tag):
        if tag == "table":
            if self._in_results and self._table_depth == self._results_depth:
                self._in_results = False
            self._table_depth -= 1
        elif tag == "td":
            self._in_cell = False
        elif tag == "a" and self._in_link:
            self._in_link = False
            name = "".join(self._text).strip()
            if name:
                self.names.append(name)

    def handle_data(self, data):
        if self._in_link:
            self._text.append(data)


def parse_package_names(body: str) -> List[str]:
    parser = _ResultsTableParser()
    parser.feed(body)
    parser.close()
    return parser.names


async def fetch_package_names(session: aiohttp.ClientSession, username: str) -> List[str]:
    """Names of the packages ``username`` maintains."""
    url = Constants.AUR_USER_PACKAGES_URL.format(username=quote(username, safe=""))
    body = await get_text(session, url, context="aur")
    return parse_package_names(body)
