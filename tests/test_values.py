"""Tests for paths, lazy providers and the value preprocessor."""

from __future__ import annotations

from restrictstore import Lazy, Path, Permission, Store, StoreConfig, preprocess
from restrictstore.values import is_tagged, realize, untag


class TestPath:
    """Tests for Path parsing."""

    def test_parse_segments(self) -> None:
        path = Path.parse("a:b:c")
        assert path.segments == ("a", "b", "c")
        assert len(path) == 3
        assert path.last == 2
        assert path[1] == "b"
        assert list(path) == ["a", "b", "c"]
        assert str(path) == "a:b:c"

    def test_no_escaping(self) -> None:
        """A separator always splits: there is no escape sequence."""
        assert Path.parse("a\\:b").segments == ("a\\", "b")

    def test_empty_segments_kept(self) -> None:
        assert Path.parse("").segments == ("",)
        assert Path.parse("a::b").segments == ("a", "", "b")

    def test_custom_separator(self) -> None:
        path = Path.parse("a/b", separator="/")
        assert path.segments == ("a", "b")
        assert str(path) == "a/b"

    def test_parse_path_is_identity(self) -> None:
        path = Path.parse("a:b")
        assert Path.parse(path) is path


class TestLazy:
    """Tests for explicit provider values."""

    def test_realize_invokes_lazy_only(self) -> None:
        assert realize(Lazy(lambda: 42)) == 42
        func = lambda: 42  # noqa: E731
        assert realize(func) is func
        assert realize({"a": 1}) == {"a": 1}


class TestTagging:
    def test_is_tagged(self) -> None:
        assert is_tagged({"store": {}})
        assert not is_tagged({"other": {}})
        assert not is_tagged(["store"])
        assert is_tagged({"box": 1}, sentinel="box")

    def test_untag_merges_sentinel_over_siblings(self) -> None:
        assert untag({"a": 1, "b": 2, "store": {"b": 3}}) == {"a": 1, "b": 3}

    def test_untag_ignores_non_object_sentinel(self) -> None:
        assert untag({"a": 1, "store": True}) == {"a": 1}


class TestPreprocess:
    """Tests for the write-side preprocessor."""

    def test_copies_plain_json(self) -> None:
        value = {"a": {"b": [1, {"c": 2}]}}
        result = preprocess(value, Store)
        assert result == value
        assert result is not value
        assert result["a"]["b"] is not value["a"]["b"]

    def test_primitives_pass_through(self) -> None:
        assert preprocess(5, Store) == 5
        assert preprocess(None, Store) is None

    def test_tagged_object_becomes_store(self) -> None:
        result = preprocess({"profile": {"store": {"name": "x"}}}, Store)
        profile = result["profile"]
        assert isinstance(profile, Store)
        assert profile.read("name") == "x"

    def test_tagged_inside_list(self) -> None:
        result = preprocess([{"store": {"a": 1}}, 2], Store)
        assert isinstance(result[0], Store)
        assert result[1] == 2

    def test_nested_tags_become_nested_stores(self) -> None:
        result = preprocess({"store": {"inner": {"store": {"a": 1}}}}, Store)
        assert isinstance(result, Store)
        assert isinstance(result.read("inner"), Store)
        assert result.read("inner:a") == 1

    def test_stores_and_lazy_pass_through(self) -> None:
        store = Store()
        lazy = Lazy(lambda: 1)
        assert preprocess(store, Store) is store
        assert preprocess({"l": lazy}, Store)["l"] is lazy

    def test_factory_policy_applies_to_seeded_entries(self) -> None:
        result = preprocess({"store": {"a": 1}}, lambda: Store(default_policy=Permission.READ))
        assert isinstance(result, Store)
        assert result.entries() == {}


class TestPromotionThroughStore:
    """Tagged fragments written through the path API."""

    def test_write_creates_genuine_nested_store(self) -> None:
        store = Store()
        store.write("settings", {"store": {"theme": "dark"}})
        nested = store.read("settings")
        assert isinstance(nested, Store)
        assert nested is not store
        assert nested.allowed_to_read("theme")
        assert nested.allowed_to_write("theme")
        assert store.read("settings:theme") == "dark"

    def test_promoted_store_has_independent_policy(self) -> None:
        store = Store()
        store.write("settings", {"store": {"theme": "dark"}})
        nested = store.read("settings")
        nested.default_policy = Permission.NONE
        assert store.allowed_to_read("settings")
        assert not nested.allowed_to_read("theme")
        assert store.entries() == {"settings": {}}

    def test_promoted_store_uses_configured_base_policy(self) -> None:
        config = StoreConfig(default_policy=Permission.READ)
        store = Store(default_policy=Permission.READ_WRITE, config=config)
        store.write("child", {"store": {"a": 1}})
        child = store.read("child")
        assert child.default_policy is Permission.READ
        assert child.entries() == {}

    def test_custom_sentinel(self) -> None:
        store = Store(config=StoreConfig(sentinel_key="$store"))
        store.write("child", {"$store": {"a": 1}, "store": 2})
        child = store.read("child")
        assert isinstance(child, Store)
        assert child.entries() == {"a": 1, "store": 2}

    def test_child_store_class(self) -> None:
        class Child(Store):
            restrictions = {"locked": Permission.READ}

        class Parent(Store):
            child_store_class = Child

        parent = Parent()
        parent.write_entries({"c": {"store": {"locked": 1, "open": 2}}})
        child = parent.read("c")
        assert isinstance(child, Child)
        assert child.entries() == {"open": 2}
