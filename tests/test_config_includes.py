"""Tests for suiteconf.config.includes."""

import pytest

from suiteconf.config.errors import ConfigurationError
from suiteconf.config.includes import expand_includes, is_wildcard


class TestIsWildcard:
    @pytest.mark.parametrize("include", ["tests/*", "modules/?", "../shared", "./a"])
    def test_wildcards(self, include):
        assert is_wildcard(include)

    def test_plain_path(self):
        assert not is_wildcard("modules/billing")


class TestExpandIncludes:
    def test_glob_expands_to_config_dirs(self, make_project):
        root = make_project({"tests/moduleA/codeception.yml": "paths: {}\n"})
        assert expand_includes(["tests/*"], root) == ["tests/moduleA"]

    def test_literal_passes_through(self, tmp_path):
        assert expand_includes(["modules/billing"], tmp_path) == ["modules/billing"]

    def test_empty(self, tmp_path):
        assert expand_includes([], tmp_path) == []

    def test_dist_config_found_and_deduplicated(self, make_project):
        root = make_project(
            {
                "apps/b/codeception.dist.yml": "",
                "apps/b/codeception.yml": "",
                "apps/a/codeception.yml": "",
                "apps/c/README.md": "",
            }
        )
        assert expand_includes(["apps/*"], root) == ["apps/a", "apps/b"]

    def test_recursive_search(self, make_project):
        root = make_project({"apps/a/nested/deep/codeception.yml": ""})
        assert expand_includes(["apps/*"], root) == ["apps/a/nested/deep"]

    def test_mixed_order_kept(self, make_project):
        root = make_project({"apps/a/codeception.yml": ""})
        assert expand_includes(["first", "apps/*", "last"], root) == ["first", "apps/a", "last"]

    def test_unresolvable_glob(self, tmp_path):
        with pytest.raises(ConfigurationError, match='could not be found in "nowhere/\\*"'):
            expand_includes(["nowhere/*"], tmp_path)
