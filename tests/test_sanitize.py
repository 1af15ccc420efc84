"""Tests for sanitize() — the public sanitizing entry point."""

import logging

import pytest

from sanitree import DEFAULT_SCHEMA, h, sanitize, u
from sanitree.location import Point, Position
from sanitree.nodes import Comment, Doctype, Element, Raw, Root, Text, Unknown
from sanitree.sanitize import collapse

POSITION_DICT = {
    "start": {"line": 1, "column": 1},
    "end": {"line": 2, "column": 1},
}
POSITION = Position(Point(1, 1), Point(2, 1))

SCRIPT_DICT = {
    "type": "element",
    "tagName": "script",
    "children": [{"type": "text", "value": "alert(1)"}],
}


def _hostile(type_name: str) -> dict:
    """A node dict carrying every field any node kind could have."""
    return {
        "type": type_name,
        "tagName": "div",
        "value": "alert(1)",
        "unknown": "alert(1)",
        "properties": {"href": "javascript:alert(1)"},
        "children": [SCRIPT_DICT],
        "data": {"href": "alert(1)"},
        "position": POSITION_DICT,
    }


class _Stringable:
    def __str__(self) -> str:
        return "alert(1);"


# =============================================================================
# Non-nodes and ignored node kinds
# =============================================================================


class TestNonNodes:
    @pytest.mark.parametrize("value", [True, None, 1, [], "text", 1.5, object()])
    def test_non_node_gives_empty_root(self, value: object) -> None:
        assert sanitize(value) == Root()

    def test_mapping_without_type(self) -> None:
        assert sanitize({"tagName": "p", "children": []}) == Root()

    def test_mapping_with_non_string_type(self) -> None:
        assert sanitize({"type": 5}) == Root()


class TestIgnoredNodes:
    def test_unknown_node(self) -> None:
        assert sanitize(u("unknown", "<xml></xml>")) == Root()

    def test_raw(self) -> None:
        assert sanitize(u("raw", "<xml></xml>")) == Root()

    def test_declaration_directive(self) -> None:
        assert sanitize(u("directive", {"name": "!alpha"}, "!alpha bravo")) == Root()

    def test_processing_instruction_directive(self) -> None:
        assert sanitize(u("directive", {"name": "?xml"}, '?xml version="1.0"')) == Root()

    def test_character_data(self) -> None:
        assert sanitize(u("characterData", "alpha")) == Root()

    def test_comment(self) -> None:
        assert sanitize(u("comment", "alpha")) == Root()

    def test_doctype(self) -> None:
        assert sanitize(Doctype("html")) == Root()

    def test_other_kinds_dropped_among_siblings(self) -> None:
        tree = h("p", Comment("c"), "a", Raw("<b>"), Unknown("x"), "b")
        assert sanitize(tree) == h("p", "a", "b")


# =============================================================================
# Text
# =============================================================================


class TestText:
    def test_keeps_only_known_fields(self) -> None:
        assert sanitize(_hostile("text")) == Text(
            "alert(1)", data={"href": "alert(1)"}, position=POSITION
        )

    def test_allows_text(self) -> None:
        assert sanitize(u("text", "alert(1)")) == Text("alert(1)")

    def test_ignores_non_string_value(self) -> None:
        assert sanitize(u("text", {"toString": _Stringable()})) == Root()
        assert sanitize(Text(_Stringable())) == Root()  # type: ignore[arg-type]
        assert sanitize(Text(42)) == Root()  # type: ignore[arg-type]

    def test_ignores_text_in_script(self) -> None:
        assert sanitize(h("script", u("text", "alert(1)"))) == Root()

    def test_shows_text_in_style(self) -> None:
        assert sanitize(h("style", u("text", "alert(1)"))) == Text("alert(1)")

    def test_allowed_stripped_tag_is_still_dropped(self) -> None:
        schema = DEFAULT_SCHEMA.extend().allow_tags("script").build()
        assert sanitize(h("div", h("script", "alert(1)")), schema) == h("div")

    def test_text_nested_in_allowed_stripped_tag_is_dropped(self) -> None:
        schema = DEFAULT_SCHEMA.extend().allow_tags("script").build()
        tree = h("div", h("script", h("b", "alert(1)")), "kept")
        assert sanitize(tree, schema) == h("div", "kept")


# =============================================================================
# Element
# =============================================================================


class TestElement:
    def test_keeps_only_known_fields(self) -> None:
        assert sanitize(_hostile("element")) == Element(
            "div",
            properties={},
            children=(),
            data={"href": "alert(1)"},
            position=POSITION,
        )

    def test_unwraps_unknown_elements(self) -> None:
        assert sanitize(h("unknown", u("text", "alert(1)"))) == Text("alert(1)")

    def test_unwraps_elements_without_name(self) -> None:
        tree = {"type": "element", "properties": {}, "children": [{"type": "text", "value": "alert(1)"}]}
        assert sanitize(tree) == Text("alert(1)")
        assert sanitize(Element(None, children=(Text("alert(1)"),))) == Text("alert(1)")
        assert sanitize(Element("", children=(Text("alert(1)"),))) == Text("alert(1)")

    def test_unwraps_wildcard_tag_name(self) -> None:
        assert sanitize(h("*", "x")) == Text("x")

    def test_element_without_children_or_properties(self) -> None:
        assert sanitize({"type": "element", "tagName": "div"}) == h("div")

    def test_unknown_empty_element_gives_root(self) -> None:
        assert sanitize(h("unknown", [])) == Root()

    def test_stripped_empty_element_gives_root(self) -> None:
        assert sanitize(h("script", [])) == Root()

    def test_unknown_element_splices_children_in_place(self) -> None:
        tree = h("div", h("style", [u("text", "1"), u("text", "2")]))
        assert sanitize(tree) == h("div", [u("text", "1"), u("text", "2")])

    def test_unwrapped_single_child_is_returned_bare(self) -> None:
        assert sanitize(h("unknown", [u("text", "value")])) == Text("value")

    def test_unwrapped_children_are_wrapped_in_root(self) -> None:
        assert sanitize(h("unknown", [u("text", "1"), u("text", "2")])) == Root(
            children=(Text("1"), Text("2"))
        )

    def test_strip_drops_whole_subtree(self) -> None:
        tree = h("div", "a", h("script", h("p", "hidden"), "alert(1)"), "b")
        assert sanitize(tree) == h("div", "a", "b")

    def test_non_mapping_properties_are_treated_as_empty(self) -> None:
        assert sanitize(Element("div", properties=["id"])) == h("div")  # type: ignore[arg-type]

    def test_non_sequence_children_are_treated_as_empty(self) -> None:
        assert sanitize(Element("div", children="alert(1)")) == h("div")  # type: ignore[arg-type]

    def test_non_node_children_are_dropped(self) -> None:
        tree = Element("p", children=(Text("a"), "b", None, 3, Text("c")))  # type: ignore[arg-type]
        assert sanitize(tree) == h("p", "a", "c")


class TestProperties:
    def test_allows_known_generic_properties(self) -> None:
        assert sanitize(h("div", {"alt": "alpha"})) == h("div", {"alt": "alpha"})

    def test_allows_specific_properties(self) -> None:
        assert sanitize(h("a", {"href": "#heading"})) == h("a", {"href": "#heading"})

    def test_ignores_mismatched_specific_properties(self) -> None:
        assert sanitize(h("img", {"href": "#heading"})) == h("img")

    def test_ignores_unspecified_properties(self) -> None:
        assert sanitize(h("div", {"dataFoo": "bar"})) == h("div")

    def test_ignores_event_handlers(self) -> None:
        assert sanitize(h("img", {"onError": "alert(1)", "alt": "x"})) == h("img", {"alt": "x"})

    def test_allows_data_wildcard(self) -> None:
        schema = DEFAULT_SCHEMA.extend().allow_attributes("*", "data*").build()
        assert sanitize(h("div", {"dataFoo": "bar"}), schema) == h("div", {"dataFoo": "bar"})

    def test_data_wildcard_needs_a_suffix(self) -> None:
        schema = DEFAULT_SCHEMA.extend().allow_attributes("*", "data*").build()
        assert sanitize(h("div", {"data": "bar"}), schema) == h("div")

    def test_allows_strings(self) -> None:
        assert sanitize(h("img", {"alt": "hello"})) == h("img", {"alt": "hello"})

    def test_allows_booleans(self) -> None:
        assert sanitize(h("img", {"alt": True})) == h("img", {"alt": True})

    def test_allows_numbers(self) -> None:
        assert sanitize(h("img", {"alt": 1})) == h("img", {"alt": 1})
        assert sanitize(h("img", {"width": 1.5})) == h("img", {"width": 1.5})

    def test_ignores_none(self) -> None:
        assert sanitize(Element("img", properties={"alt": None})) == h("img")

    def test_ignores_objects(self) -> None:
        assert sanitize(Element("img", properties={"alt": _Stringable()})) == h("img")
        assert sanitize(Element("img", properties={"alt": {"a": 1}})) == h("img")

    def test_supports_arrays(self) -> None:
        tree = Element("img", properties={"alt": [1, True, "three", [4], _Stringable()]})
        assert sanitize(tree) == h("img", {"alt": (1, True, "three")})

    def test_keeps_emptied_arrays(self) -> None:
        tree = Element("img", properties={"alt": [{"a": 1}, None]})
        assert sanitize(tree) == h("img", {"alt": ()})

    def test_prevents_clobbering_id(self) -> None:
        assert sanitize(h("div", {"id": "getElementById"})) == h(
            "div", {"id": "user-content-getElementById"}
        )

    def test_prevents_clobbering_name(self) -> None:
        assert sanitize(h("div", {"name": "getElementById"})) == h(
            "div", {"name": "user-content-getElementById"}
        )

    def test_does_not_prefix_twice(self) -> None:
        tree = h("div", {"id": "user-content-x"})
        assert sanitize(tree) == tree

    def test_non_string_properties_keys_are_ignored(self) -> None:
        tree = Element("div", properties={1: "x", "alt": "y"})  # type: ignore[dict-item]
        assert sanitize(tree) == h("div", {"alt": "y"})


# =============================================================================
# URLs
# =============================================================================

VALID_RELATIVE = {
    "anchor": "#heading",
    "relative": "/file.html",
    "search": "example.com?foo:bar",
    "hash": "example.com#foo:bar",
    "protocol-less": "www.example.com",
    "https": "https://example.com",
    "http": "http://example.com",
    "uppercase scheme": "HTTPS://example.com",
}

INVALID_ALWAYS = {
    "javascript": "javascript:alert(1)",
    "uppercase javascript": "JavaScript:alert(1)",
    "Unicode LS/PS I": "\u2028javascript:alert(1)",
    "Unicode LS/PS II": "\u2029javascript:alert(1)",
    "Unicode Whitespace (#1)": " javascript:alert(1)",
    "Unicode Whitespace (#2)": "\u3000javascript:alert(1)",
    "tab": "\tjavascript:alert(1)",
    "control character": "\x01javascript:alert(1)",
    "infinity loop": "javascript:while(1){}",
    "data URL": "data:,evilnastystuff",
    "vbscript": "vbscript:msgbox(1)",
}

MAILTO = "mailto:foo@bar.com"


def _url_cases(tag_name: str, prop: str, *, mailto_valid: bool) -> list:
    valid = dict(VALID_RELATIVE)
    invalid = dict(INVALID_ALWAYS)
    (valid if mailto_valid else invalid)["mailto"] = MAILTO
    cases = [pytest.param(tag_name, prop, url, True, id=f"{tag_name}-{prop}-allow-{name}") for name, url in valid.items()]
    cases += [pytest.param(tag_name, prop, url, False, id=f"{tag_name}-{prop}-clean-{name}") for name, url in invalid.items()]
    return cases


URL_CASES = [
    *_url_cases("a", "href", mailto_valid=True),
    *_url_cases("blockquote", "cite", mailto_valid=False),
    *_url_cases("img", "src", mailto_valid=False),
    *_url_cases("img", "longDesc", mailto_valid=False),
]


class TestUrls:
    @pytest.mark.parametrize(("tag_name", "prop", "url", "valid"), URL_CASES)
    def test_url_properties(self, tag_name: str, prop: str, url: str, valid: bool) -> None:
        props = {prop: url}
        assert sanitize(h(tag_name, props)) == h(tag_name, props if valid else {})

    def test_javascript_href_is_removed_but_link_kept(self) -> None:
        tree = h("a", {"href": "javascript:alert(1)"}, "click")
        assert sanitize(tree) == h("a", "click")

    def test_mailto_depends_on_attribute(self) -> None:
        schema = (
            DEFAULT_SCHEMA.extend()
            .set_protocols("href", "mailto")
            .set_protocols("cite", "http", "https")
            .build()
        )
        assert sanitize(h("a", {"href": MAILTO}), schema) == h("a", {"href": MAILTO})
        assert sanitize(h("blockquote", {"cite": MAILTO}), schema) == h("blockquote")

    def test_array_values_are_checked_per_item(self) -> None:
        tree = h("a", {"href": ["#ok", "javascript:alert(1)", "https://example.com"]})
        assert sanitize(tree) == h("a", {"href": ("#ok", "https://example.com")})

    def test_numbers_are_not_scheme_checked(self) -> None:
        assert sanitize(h("a", {"href": 5})) == h("a", {"href": 5})


# =============================================================================
# Structure
# =============================================================================


class TestListItems:
    def test_li_outside_list(self) -> None:
        assert sanitize(h("li", "alert(1)")) == Text("alert(1)")

    @pytest.mark.parametrize("list_tag", ["ol", "ul"])
    def test_li_in_list(self, list_tag: str) -> None:
        tree = h(list_tag, h("li", "alert(1)"))
        assert sanitize(tree) == tree

    @pytest.mark.parametrize("list_tag", ["ol", "ul"])
    def test_li_descendant_of_list(self, list_tag: str) -> None:
        tree = h(list_tag, h("div", h("li", "alert(1)")))
        assert sanitize(tree) == tree

    def test_unwrapped_parent_does_not_count_as_ancestor(self) -> None:
        # ``menu`` is not allowed, so it contributes no tag to the chain.
        tree = h("div", h("menu", h("li", "x")))
        assert sanitize(tree) == h("div", "x")


@pytest.mark.parametrize("name", ["tr", "td", "th", "tbody", "thead", "tfoot"])
class TestTableParts:
    def test_outside_table(self, name: str) -> None:
        assert sanitize(h(name, "alert(1)")) == Text("alert(1)")

    def test_in_table(self, name: str) -> None:
        tree = h("table", h(name, "alert(1)"))
        assert sanitize(tree) == tree

    def test_descendant_of_table(self, name: str) -> None:
        tree = h("table", h("div", h(name, "alert(1)")))
        assert sanitize(tree) == tree


# =============================================================================
# Root
# =============================================================================


class TestRoot:
    def test_keeps_only_known_fields(self) -> None:
        assert sanitize(_hostile("root")) == Root(
            children=(), data={"href": "alert(1)"}, position=POSITION
        )

    def test_root_stays_root_with_one_child(self) -> None:
        tree = Root(children=(h("p", "x"),))
        assert sanitize(tree) == tree

    def test_root_children_are_cleaned(self) -> None:
        tree = Root(children=(h("li", "a"), Comment("c"), h("script", "b"), h("p", "c")))
        assert sanitize(tree) == Root(children=(Text("a"), h("p", "c")))

    def test_script_gives_empty_root(self) -> None:
        assert sanitize(h("script", "alert(1)")) == Root()


# =============================================================================
# Output collapsing, schema selection, input immutability, logging
# =============================================================================


class TestCollapse:
    def test_nothing(self) -> None:
        assert collapse(()) == Root()

    def test_one(self) -> None:
        assert collapse((Text("a"),)) == Text("a")

    def test_many(self) -> None:
        result = collapse((Text("a"), Text("b")))
        assert result == Root(children=(Text("a"), Text("b")))
        assert result.data is None
        assert result.position is None


class TestSchemaArgument:
    def test_explicit_schema(self) -> None:
        schema = DEFAULT_SCHEMA.extend().allow_tags("span").build()
        assert sanitize(h("span", "x"), schema) == h("span", "x")
        assert sanitize(h("span", "x")) == Text("x")

    def test_empty_schema_keeps_only_text(self) -> None:
        from sanitree.schema import Schema

        tree = h("div", h("p", "a"), h("script", "b"))
        assert sanitize(tree, Schema()) == Text("a")


class TestInputIsNotModified:
    def test_input_unchanged(self) -> None:
        props = {"id": "x", "href": "javascript:alert(1)"}
        tree = Root(children=(h("a", props, h("li", "x")),))
        before = repr(tree)
        result = sanitize(tree)
        assert repr(tree) == before
        assert props == {"id": "x", "href": "javascript:alert(1)"}
        assert result is not tree
        assert result.children[0] is not tree.children[0]

    def test_data_is_passed_through(self) -> None:
        data = {"meta": 1}
        result = sanitize(Text("x", data=data))
        assert result.data == data


class TestLogging:
    def test_logs_unwrapped_elements(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="sanitree")
        sanitize(h("li", "x"))
        assert any("Unwrapping" in record.getMessage() for record in caplog.records)
        assert all(record.name.startswith("sanitree.") for record in caplog.records)

    def test_logs_stripped_subtrees(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="sanitree")
        sanitize(h("script", "alert(1)"))
        assert any("Dropping <script>" in record.getMessage() for record in caplog.records)

    def test_silent_above_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="sanitree")
        sanitize(h("div", {"id": 1}, h("script", "x")))
        assert caplog.records == []

    def test_unwrap_message_is_not_built_above_debug(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from sanitree.schema import Schema

        calls: list[str] = []
        original = Schema.required_ancestors

        def counting(self: Schema, tag_name: str) -> frozenset[str]:
            calls.append(tag_name)
            return original(self, tag_name)

        monkeypatch.setattr(Schema, "required_ancestors", counting)

        caplog.set_level(logging.INFO, logger="sanitree")
        sanitize(h("li", "x"))
        assert calls == ["li"]

        calls.clear()
        caplog.set_level(logging.DEBUG, logger="sanitree")
        sanitize(h("li", "x"))
        assert calls == ["li", "li"]
