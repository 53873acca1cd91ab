"""Tests for RepositoryCrawler."""

import pytest

from pass_authz.features.acl import RepositoryCrawler, ResourceCrawler
from pass_authz.features.acl.repositories.crawler import ignoring, one_level

TREE = {
    "root": ["root/a", "root/b"],
    "root/a": ["root/a/1", "root/a/2"],
    "root/a/1": ["root/a/1/x"],
}


class TreeLister:
    def __init__(self, tree):
        self.tree = tree
        self.listed = []

    async def get_children(self, uri):
        self.listed.append(uri)
        return list(self.tree.get(uri, []))


class TestRepositoryCrawler:
    """Test suite for RepositoryCrawler."""

    def setup_method(self):
        self.lister = TreeLister(TREE)
        self.crawler = RepositoryCrawler(self.lister)
        self.visited = []

    async def visitor(self, uri):
        self.visited.append(uri)

    def test_is_resource_crawler(self):
        assert isinstance(self.crawler, ResourceCrawler)

    @pytest.mark.asyncio
    async def test_visits_everything_depth_first(self):
        count = await self.crawler.visit("root", self.visitor)

        assert count == 6
        assert self.visited == [
            "root", "root/a", "root/a/1", "root/a/1/x", "root/a/2", "root/b",
        ]

    @pytest.mark.asyncio
    async def test_ignored_resources_are_walked_but_not_visited(self):
        count = await self.crawler.visit("root", self.visitor, ignoring("root", "root/a"))

        assert count == 4
        assert "root" not in self.visited
        assert "root/a" not in self.visited
        assert "root/a/1/x" in self.visited

    @pytest.mark.asyncio
    async def test_one_level(self):
        count = await self.crawler.visit("root", self.visitor, ignoring("root"), one_level)

        assert count == 2
        assert self.visited == ["root/a", "root/b"]
        assert self.lister.listed == ["root"]

    @pytest.mark.asyncio
    async def test_no_descent(self):
        count = await self.crawler.visit("root", self.visitor, descend=lambda depth: False)

        assert count == 1
        assert self.lister.listed == []

    @pytest.mark.asyncio
    async def test_visitor_errors_propagate(self):
        async def failing(uri):
            if uri == "root/a/1":
                raise RuntimeError("boom")
            self.visited.append(uri)

        with pytest.raises(RuntimeError):
            await self.crawler.visit("root", failing)

        assert "root/b" not in self.visited
