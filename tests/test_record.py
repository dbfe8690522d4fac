"""Tests for Record."""

from computed_property import Record, computed_property


def page():
    return Record(name="home-page", ext=".hbs", dirname="views", data={"title": "Home"})


class TestRecord:
    def test_creation_from_fields(self):
        r = Record(x=10, y="hello")
        assert r.x == 10
        assert r.y == "hello"

    def test_mapping_and_fields_merge(self):
        r = Record({"x": 10, "y": "hello"}, x=99)
        assert r.x == 99
        assert r.y == "hello"

    def test_field_named_values(self):
        r = Record(values=[1, 2])
        assert r.values == [1, 2]

    def test_get_nested(self):
        assert page().get("data.title") == "Home"

    def test_get_nonexistent(self):
        r = Record(x=1)
        assert r.get("nope") is None
        assert r.get("nope.deeper", "fallback") == "fallback"

    def test_set_nested_creates_containers(self):
        r = Record()
        r.set("meta.author.name", "doowb")
        assert r.meta == {"author": {"name": "doowb"}}

    def test_update(self):
        r = page()
        r.update({"dirname": "pages", "data.title": "About"})
        assert r.dirname == "pages"
        assert r.data == {"title": "About"}

    def test_iteration_includes_computed(self):
        r = page()
        computed_property(
            r, "path", ["name", "ext", "dirname"], lambda p: p.dirname + "/" + p.name + p.ext
        )
        assert list(r) == ["name", "ext", "dirname", "data", "path"]
        assert "path" in r

    def test_contains(self):
        r = Record(x=1)
        r._hidden = 2
        computed_property(r, "double", ["x"], lambda p: p.x * 2)
        assert "x" in r
        assert "double" in r
        assert "_hidden" not in r
        assert "nope" not in r
        assert 1 not in r

    def test_iteration_skips_private(self):
        r = Record(x=1)
        r._hidden = 2
        assert list(r) == ["x"]

    def test_to_dict_evaluates_computed(self):
        r = Record(a=1, b=2)
        computed_property(r, "total", ["a", "b"], lambda p: p.a + p.b)
        computed_property(r, "sink", ["a"], {"set": lambda p, v: None})
        assert r.to_dict() == {"a": 1, "b": 2, "total": 3}

    def test_set_through_record_invalidates(self):
        r = page()
        computed_property(r, "title", ["data.title"], lambda p: p.data["title"].upper())
        assert r.title == "HOME"
        r.set("data.title", "About")
        assert r.title == "ABOUT"

    def test_repr(self):
        assert repr(Record(x=1)) == "Record(x=1)"
