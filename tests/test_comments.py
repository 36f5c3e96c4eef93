"""
Tests for Comments - aggregate operations and display-part utilities

These tests validate:
- Label extraction on construction
- Visibility, emptiness and modifier set semantics
- Block tag lookups and removal
- Clone independence (bookkeeping fields copied)
- combine_display_parts and split_parts_to_header_and_body
"""

from docmodel.models import (
    ReflectionKind, ReflectionSymbolId,
    Comment, CommentTag, TextPart, CodePart, InlineTagPart, RelativeLinkPart,
    combine_display_parts, clone_display_parts, split_parts_to_header_and_body,
)


def param(name, text):
    return CommentTag("@param", [TextPart(text)], name=name)


class TestLabelExtraction:
    """An inline @label never stays in the summary."""

    def test_label_is_extracted(self):
        comment = Comment([TextPart("Summary "), InlineTagPart("@label", "Foo"), TextPart(" end")])

        assert comment.label == "Foo"
        assert comment.summary == [TextPart("Summary "), TextPart(" end")]
        assert not any(
            isinstance(p, InlineTagPart) and p.tag == "@label" for p in comment.summary
        )

    def test_only_first_label_is_taken(self):
        comment = Comment([InlineTagPart("@label", "A"), InlineTagPart("@label", "B")])

        assert comment.label == "A"
        assert comment.summary == [InlineTagPart("@label", "B")]

    def test_no_label(self):
        comment = Comment([TextPart("Plain")])
        assert comment.label is None

    def test_label_survives_clone(self):
        comment = Comment([InlineTagPart("@label", "Foo")])
        assert comment.clone().label == "Foo"


class TestVisibility:
    """has_visible_component / is_empty"""

    def test_empty_comment(self):
        comment = Comment()
        assert comment.has_visible_component() is False
        assert comment.is_empty() is True

    def test_empty_text_parts_are_invisible(self):
        assert Comment([TextPart(""), TextPart("")]).has_visible_component() is False

    def test_text_is_visible(self):
        assert Comment([TextPart("Hello")]).has_visible_component() is True

    def test_non_text_part_is_visible(self):
        """Even an empty code part counts."""
        assert Comment([CodePart("")]).has_visible_component() is True

    def test_block_tag_is_visible(self):
        comment = Comment([], [CommentTag("@returns", [])])
        assert comment.has_visible_component() is True

    def test_modifier_only_is_not_empty(self):
        comment = Comment(modifier_tags={"@internal"})
        assert comment.has_visible_component() is False
        assert comment.is_empty() is False


class TestModifiers:
    """Modifier tags behave as a set."""

    def test_adding_twice_is_idempotent(self):
        comment = Comment()
        comment.modifier_tags.add("@beta")
        comment.modifier_tags.add("@beta")
        assert len(comment.modifier_tags) == 1

    def test_list_input_is_deduplicated(self):
        comment = Comment(modifier_tags=["@beta", "@beta", "@alpha"])
        assert comment.modifier_tags == {"@beta", "@alpha"}

    def test_has_and_remove(self):
        comment = Comment(modifier_tags={"@beta"})
        assert comment.has_modifier("@beta") is True

        comment.remove_modifier("@beta")
        assert comment.has_modifier("@beta") is False

    def test_remove_missing_modifier_is_noop(self):
        comment = Comment()
        comment.remove_modifier("@beta")
        assert comment.modifier_tags == set()


class TestBlockTags:
    """Lookups by tag name and identifier."""

    def make(self):
        return Comment([], [
            param("a", "first"),
            CommentTag("@returns", [TextPart("result")]),
            param("b", "second"),
            param("a", "duplicate"),
        ])

    def test_get_tag_returns_first_match(self):
        tag = self.make().get_tag("@param")
        assert tag.name == "a"
        assert tag.content == [TextPart("first")]

    def test_get_tag_missing(self):
        assert self.make().get_tag("@example") is None

    def test_get_tags_in_order(self):
        names = [tag.name for tag in self.make().get_tags("@param")]
        assert names == ["a", "b", "a"]

    def test_get_tags_missing(self):
        assert self.make().get_tags("@example") == []

    def test_get_identified_tag(self):
        comment = self.make()
        assert comment.get_identified_tag("b", "@param").content == [TextPart("second")]
        assert comment.get_identified_tag("a", "@param").content == [TextPart("first")]
        assert comment.get_identified_tag("c", "@param") is None
        assert comment.get_identified_tag("a", "@returns") is None

    def test_remove_tags_in_place(self):
        comment = self.make()
        tags = comment.block_tags

        comment.remove_tags("@param")

        assert comment.block_tags is tags
        assert [tag.tag for tag in comment.block_tags] == ["@returns"]


class TestClone:
    """Clone independence."""

    def test_comment_clone_is_deep(self):
        original = Comment(
            [TextPart("Summary")],
            [param("a", "value")],
            {"@beta"},
        )
        copy = original.clone()

        copy.summary[0].text = "Changed"
        copy.block_tags[0].content[0].text = "Changed"
        copy.block_tags.append(CommentTag("@returns", []))
        copy.modifier_tags.add("@alpha")

        assert original.summary == [TextPart("Summary")]
        assert original.block_tags == [param("a", "value")]
        assert original.modifier_tags == {"@beta"}

    def test_clone_copies_bookkeeping_fields(self):
        original = Comment([TextPart("x")])
        original.source_path = "src/range.ts"
        original.discovery_id = 7

        copy = original.clone()

        assert copy.source_path == "src/range.ts"
        assert copy.discovery_id == 7

    def test_bookkeeping_fields_do_not_affect_equality(self):
        a = Comment([TextPart("x")])
        b = Comment([TextPart("x")])
        a.source_path = "a.ts"
        b.discovery_id = 3
        assert a == b

    def test_tag_clone_keeps_name(self):
        tag = param("value", "The value")
        copy = tag.clone()

        assert copy == tag
        assert copy.content is not tag.content

    def test_clone_display_parts_shares_targets(self, project_factory):
        target = project_factory.add("Range", ReflectionKind.INTERFACE)
        parts = [InlineTagPart("@link", "Range", target=target)]

        copy = clone_display_parts(parts)

        assert copy[0] is not parts[0]
        assert copy[0].target is target


class TestCombineDisplayParts:
    """Debug flattening."""

    def test_text_and_code(self):
        assert combine_display_parts([TextPart("a "), CodePart("`b`")]) == "a `b`"

    def test_inline_tag(self):
        assert combine_display_parts([InlineTagPart("@link", "Foo")]) == "{@link Foo}"

    def test_relative_link_to_reflection_uses_full_name(self, project_factory):
        mod = project_factory.add("utils", ReflectionKind.MODULE)
        target = project_factory.add("Range", ReflectionKind.INTERFACE, mod)

        assert combine_display_parts([RelativeLinkPart("./r.md", target)]) == "{rel:utils.Range}"

    def test_relative_link_to_media(self):
        assert combine_display_parts([RelativeLinkPart("./img.png", 2)]) == "{rel:2}"

    def test_unresolved_relative_link_uses_text(self):
        assert combine_display_parts([RelativeLinkPart("./gone.md")]) == "{rel:./gone.md}"

    def test_none_and_empty(self):
        assert combine_display_parts(None) == ""
        assert combine_display_parts([]) == ""


class TestSplitHeaderAndBody:
    """First-line header extraction."""

    def test_two_lines(self):
        header, body = split_parts_to_header_and_body([TextPart("Line1\nLine2")])
        assert header == "Line1"
        assert body == [TextPart("Line2")]

    def test_single_line(self):
        header, body = split_parts_to_header_and_body([TextPart("Only one line")])
        assert header == "Only one line"
        assert body == []

    def test_code_part_is_not_split(self):
        """The header ends before a code block containing the newline."""
        parts = [TextPart("Intro"), CodePart("a\nb"), TextPart("more")]
        header, body = split_parts_to_header_and_body(parts)

        assert header == "Intro"
        assert body == [CodePart("a\nb"), TextPart("more")]

    def test_leading_code_part_gives_empty_header(self):
        parts = [CodePart("```ts\nx\n```"), TextPart("after")]
        header, body = split_parts_to_header_and_body(parts)

        assert header == ""
        assert body == parts
        assert body[0] is not parts[0]

    def test_empty_leading_body_text_is_dropped(self):
        header, body = split_parts_to_header_and_body([TextPart("Header\n"), TextPart("rest")])
        assert header == "Header"
        assert body == [TextPart("rest")]

    def test_inline_tags_in_header_are_flattened(self):
        parts = [TextPart("See "), InlineTagPart("@link", "Foo"), TextPart(" now\nbody")]
        header, body = split_parts_to_header_and_body(parts)

        assert header == "See {@link Foo} now"
        assert body == [TextPart("body")]

    def test_header_is_trimmed(self):
        header, _ = split_parts_to_header_and_body([TextPart("  padded  \nbody")])
        assert header == "padded"

    def test_input_is_not_mutated(self):
        parts = [TextPart("Line1\nLine2")]
        split_parts_to_header_and_body(parts)
        assert parts == [TextPart("Line1\nLine2")]

    def test_body_keeps_symbol_targets(self):
        symbol = ReflectionSymbolId("lib/a.ts", "A")
        parts = [TextPart("Head\n"), InlineTagPart("@link", "A", target=symbol)]
        _, body = split_parts_to_header_and_body(parts)
        assert body == [InlineTagPart("@link", "A", target=symbol)]
