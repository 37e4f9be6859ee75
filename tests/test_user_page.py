"""Tests for listing the packages of an AUR maintainer."""

import asyncio

import pytest

from updater.user_page import fetch_package_names, parse_package_names

PAGE = """
<html><body>
<table class="nav"><tr><td><a href="/">Home</a></td></tr></table>
<table class="results">
  <thead><tr><th>Name</th><th>Version</th></tr></thead>
  <tbody>
    <tr>
      <td><a href="/packages/mambembe">mambembe</a></td>
      <td>0.1.0-1</td>
      <td><a href="/account/jayson">jayson</a></td>
    </tr>
    <tr class="even">
      <td><a href="/packages/python-configupdater"> python-configupdater </a></td>
      <td>3.0.1-1</td>
    </tr>
  </tbody>
</table>
<table><tr><td><a href="/other">other</a></td></tr></table>
</body></html>
"""


class TestParsePackageNames:
    def test_first_cell_links_of_results_table(self):
        assert parse_package_names(PAGE) == ["mambembe", "python-configupdater"]

    def test_no_results(self):
        assert parse_package_names("<html><p>No packages matched your search criteria.</p></html>") == []


class TestFetchPackageNames:
    def test_fetches_maintainer_search(self, monkeypatch):
        seen = {}

        async def fake_get_text(session, url, *, context):
            seen["url"] = url
            return PAGE

        monkeypatch.setattr("updater.user_page.get_text", fake_get_text)
        names = asyncio.run(fetch_package_names(None, "jayson"))
        assert names == ["mambembe", "python-configupdater"]
        assert seen["url"] == "https://aur.archlinux.org/packages/?K=jayson&SeB=m"

    def test_username_is_url_encoded(self, monkeypatch):
        seen = {}

        async def fake_get_text(session, url, *, context):
            seen["url"] = url
            return ""

        monkeypatch.setattr("updater.user_page.get_text", fake_get_text)
        asyncio.run(fetch_package_names(None, "a&b c"))
        assert seen["url"] == "https://aur.archlinux.org/packages/?K=a%26b%20c&SeB=m"
