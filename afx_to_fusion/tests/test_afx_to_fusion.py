"""
Functional tests for AFX to Fusion conversion.

Each test converts a small AFX snippet and compares the complete
Fusion output.
"""

from __future__ import annotations

import re

import pytest

from afx_to_fusion import AfxParseError, FusionGenerationError, convert_afx_to_fusion


class TestEmptyInput:
    def test_empty_code_is_converted_to_empty_fusion(self):
        assert convert_afx_to_fusion("") == "''"

    def test_whitespace_code_is_converted_to_empty_fusion(self):
        assert convert_afx_to_fusion("   ") == "''"

    def test_newlines_only_are_converted_to_empty_fusion(self):
        assert convert_afx_to_fusion("  \n\n   \n ") == "''"


class TestTags:
    def test_html_tags_are_converted_to_fusion_tags(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
}"""
        assert convert_afx_to_fusion("<h1></h1>") == expected

    def test_html_tags_with_space_content(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = '   '
}"""
        assert convert_afx_to_fusion("<h1>   </h1>") == expected

    def test_html_tags_with_ignored_content(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = ''
}"""
        assert convert_afx_to_fusion("<h1>\n   \n</h1>") == expected

    def test_self_closing_tags(self):
        expected = "Neos.Fusion:Tag {\n    tagName = 'h1'\n    selfClosingTag = true\n}"
        assert convert_afx_to_fusion("<h1/>") == expected

    def test_whitespace_and_newlines_around_code_are_ignored(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
}"""
        assert convert_afx_to_fusion("   \n              <h1></h1>\n        ") == expected

    def test_attributes_are_converted_to_tag_attributes(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    selfClosingTag = true
    attributes.content = 'bar'
    attributes.class = 'fooo'
}"""
        assert convert_afx_to_fusion('<h1 content="bar" class="fooo" />') == expected

    def test_boolean_attributes(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'input'
    selfClosingTag = true
    attributes.type = 'checkbox'
    attributes.checked = true
}"""
        assert convert_afx_to_fusion('<input type="checkbox" checked />') == expected

    def test_meta_attributes_of_html_tags_are_not_prefixed(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'div'
    @position = 'start'
    @if.hasTitle = ${title}
}"""
        assert convert_afx_to_fusion('<div @position="start" @if.hasTitle={title} ></div>') == expected

    def test_content_of_html_tags_is_rendered_as_content(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = 'Fooo'
}"""
        assert convert_afx_to_fusion("<h1>Fooo</h1>") == expected

    def test_base_indentation_is_applied_to_nested_lines(self):
        expected = "Neos.Fusion:Tag {\n        tagName = 'h1'\n        selfClosingTag = true\n    }"
        assert convert_afx_to_fusion("<h1/>", indentation="    ") == expected


class TestPrototypes:
    def test_fusion_tags_are_converted_to_fusion_objects(self):
        assert convert_afx_to_fusion("<Vendor.Site:Prototype/>") == "Vendor.Site:Prototype {\n}"

    def test_attributes_become_fusion_properties(self):
        expected = """\
Vendor.Site:Prototype {
    foo = 'bar'
    baz = 'bam'
}"""
        assert convert_afx_to_fusion('<Vendor.Site:Prototype foo="bar" baz="bam" />') == expected

    def test_meta_attributes_of_fusion_objects(self):
        expected = """\
Vendor.Site:Prototype {
    @position = 'start'
    @if.hasTitle = ${title}
}"""
        assert convert_afx_to_fusion('<Vendor.Site:Prototype @position="start" @if.hasTitle={title} />') == expected

    def test_content_of_fusion_objects(self):
        expected = """\
Vendor.Site:Prototype {
    content = 'Fooo'
}"""
        assert convert_afx_to_fusion("<Vendor.Site:Prototype>Fooo</Vendor.Site:Prototype>") == expected

    def test_text_content_is_rendered_as_configured_children_property(self):
        expected = """\
Vendor.Site:Prototype {
    children = 'Fooo'
}"""
        afx = '<Vendor.Site:Prototype @children="children">Fooo</Vendor.Site:Prototype>'
        assert convert_afx_to_fusion(afx) == expected

    def test_eel_content_is_rendered_as_configured_children_property(self):
        expected = """\
Vendor.Site:Prototype {
    children = ${eelExpression()}
}"""
        afx = '<Vendor.Site:Prototype @children="children">{eelExpression()}</Vendor.Site:Prototype>'
        assert convert_afx_to_fusion(afx) == expected


class TestChildren:
    def test_multiple_tags_are_converted_to_join(self):
        expected = """\
Neos.Fusion:Join {
    item_1 = Neos.Fusion:Tag {
        tagName = 'h1'
    }
    item_2 = Neos.Fusion:Tag {
        tagName = 'p'
    }
    item_3 = Neos.Fusion:Tag {
        tagName = 'p'
    }
}"""
        assert convert_afx_to_fusion("<h1></h1><p></p><p></p>") == expected

    def test_multiple_tags_and_texts_are_converted_to_join(self):
        expected = """\
Neos.Fusion:Join {
    item_1 = 'Foo'
    item_2 = Neos.Fusion:Tag {
        tagName = 'h1'
    }
    item_3 = 'Bar'
    item_4 = Neos.Fusion:Tag {
        tagName = 'p'
    }
    item_5 = 'Baz'
}"""
        assert convert_afx_to_fusion("Foo<h1></h1>Bar<p></p>Baz") == expected

    def test_whitespace_around_code_is_ignored(self):
        expected = """\
Neos.Fusion:Join {
    item_1 = Neos.Fusion:Tag {
        tagName = 'h1'
    }
    item_2 = Neos.Fusion:Tag {
        tagName = 'p'
    }
}"""
        assert convert_afx_to_fusion("  <h1></h1><p></p>  ") == expected

    def test_complex_children_are_rendered_as_join(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = Neos.Fusion:Join {
        item_1 = Neos.Fusion:Tag {
            tagName = 'strong'
            content = 'foo'
        }
        item_2 = Neos.Fusion:Tag {
            tagName = 'i'
            content = 'bar'
        }
    }
}"""
        assert convert_afx_to_fusion("<h1><strong>foo</strong><i>bar</i></h1>") == expected

    def test_whitespace_between_complex_children_is_ignored(self):
        afx = "<h1>\n    \n    <strong>foo</strong>\n    \n    <i>bar</i>\n        \n</h1>"
        assert convert_afx_to_fusion(afx) == convert_afx_to_fusion("<h1><strong>foo</strong><i>bar</i></h1>")

    def test_children_with_keys(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = Neos.Fusion:Join {
        key_one = Neos.Fusion:Tag {
            tagName = 'strong'
            content = 'foo'
        }
        key_two = Neos.Fusion:Tag {
            tagName = 'i'
            content = 'bar'
        }
    }
}"""
        afx = '<h1><strong @key="key_one">foo</strong><i @key="key_two">bar</i></h1>'
        assert convert_afx_to_fusion(afx) == expected

    def test_keys_replace_positional_names_only_at_their_slot(self):
        expected = """\
Neos.Fusion:Join {
    item_1 = 'a'
    middle = Neos.Fusion:Tag {
        tagName = 'br'
        selfClosingTag = true
    }
    item_3 = 'b'
}"""
        assert convert_afx_to_fusion('a<br @key="middle" />b') == expected

    def test_single_child_is_never_wrapped(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'ul'
    content = Neos.Fusion:Tag {
        tagName = 'li'
        content = 'a'
    }
}"""
        assert convert_afx_to_fusion('<ul>\n  <li @key="first">a</li>\n</ul>') == expected

    def test_children_can_contain_tags_and_values(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = Neos.Fusion:Join {
        item_1 = 'a string'
        item_2 = Neos.Fusion:Tag {
            tagName = 'strong'
            content = 'a tag'
        }
        item_3 = ${eelExpression()}
    }
}"""
        assert convert_afx_to_fusion("<h1>a string<strong>a tag</strong>{eelExpression()}</h1>") == expected

    def test_comments_are_ignored(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = 'Foo'
}"""
        assert convert_afx_to_fusion("<h1><!-- a <b>comment</b> -->Foo<!-- another --></h1>") == expected


class TestPathChildren:
    def test_children_with_paths_are_rendered(self):
        expected = """\
Vendor.Site:Prototype {
    namedProp = Neos.Fusion:Tag {
        tagName = 'strong'
        content = 'foo'
    }
}"""
        afx = '<Vendor.Site:Prototype><strong @path="namedProp">foo</strong></Vendor.Site:Prototype>'
        assert convert_afx_to_fusion(afx) == expected

    def test_multiple_children_with_paths_are_rendered(self):
        expected = """\
Vendor.Site:Prototype {
    propOne = Neos.Fusion:Tag {
        tagName = 'strong'
        content = 'foo'
    }
    propTwo = Vendor.Site:Prototype {
        content = 'bar'
    }
}"""
        afx = (
            '<Vendor.Site:Prototype><strong @path="propOne">foo</strong>'
            '<Vendor.Site:Prototype @path="propTwo">bar</Vendor.Site:Prototype></Vendor.Site:Prototype>'
        )
        assert convert_afx_to_fusion(afx) == expected

    def test_path_children_are_compatible_with_content_children(self):
        expected = """\
Vendor.Site:Prototype {
    propOne = Neos.Fusion:Tag {
        tagName = 'strong'
        content = 'foo'
    }
    propTwo = Vendor.Site:Prototype {
        content = 'bar'
    }
    content = Neos.Fusion:Join {
        item_1 = Neos.Fusion:Tag {
            tagName = 'div'
            content = 'a tag'
        }
        item_2 = Neos.Fusion:Tag {
            tagName = 'div'
            content = 'another tag'
        }
    }
}"""
        afx = (
            '<Vendor.Site:Prototype><strong @path="propOne">foo</strong>'
            '<Vendor.Site:Prototype @path="propTwo">bar</Vendor.Site:Prototype>'
            "<div>a tag</div><div>another tag</div></Vendor.Site:Prototype>"
        )
        assert convert_afx_to_fusion(afx) == expected

    def test_children_with_deep_paths(self):
        expected = """\
Vendor.Site:Prototype {
    a.fusion.path = Neos.Fusion:Tag {
        tagName = 'strong'
        content = 'foo'
    }
    another.fusion.path = Vendor.Site:Prototype {
        content = 'bar'
    }
}"""
        afx = (
            '<Vendor.Site:Prototype><strong @path="a.fusion.path">foo</strong>'
            '<Vendor.Site:Prototype @path="another.fusion.path">bar</Vendor.Site:Prototype></Vendor.Site:Prototype>'
        )
        assert convert_afx_to_fusion(afx) == expected

    def test_path_children_are_rendered_before_content_regardless_of_position(self):
        expected = """\
Vendor.Site:Prototype {
    header = Neos.Fusion:Tag {
        tagName = 'h2'
        content = 'Title'
    }
    content = 'Body'
}"""
        afx = '<Vendor.Site:Prototype>Body<h2 @path="header">Title</h2></Vendor.Site:Prototype>'
        assert convert_afx_to_fusion(afx) == expected


class TestWhitespace:
    def test_spaces_newlines_and_spaces_around_are_ignored(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = Neos.Fusion:Join {
        item_1 = ${eelExpression1}
        item_2 = ${eelExpression2}
        item_3 = ${eelExpression3}
    }
}"""
        afx = """<h1>
            {eelExpression1}
            {eelExpression2}
            {eelExpression3}
        </h1>"""
        assert convert_afx_to_fusion(afx) == expected

    def test_spaces_inside_a_line_are_preserved(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = Neos.Fusion:Join {
        item_1 = ${eelExpression1}
        item_2 = ' '
        item_3 = ${eelExpression2}
    }
}"""
        afx = """<h1>
            {eelExpression1} {eelExpression2}
        </h1>"""
        assert convert_afx_to_fusion(afx) == expected

    def test_spaces_inside_a_line_are_preserved_for_strings(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    content = Neos.Fusion:Join {
        item_1 = 'String '
        item_2 = ${eelExpression}
        item_3 = ' String'
    }
}"""
        afx = """<h1>
            String {eelExpression} String
        </h1>"""
        assert convert_afx_to_fusion(afx) == expected

    def test_text_lines_are_joined_with_a_single_space(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'p'
    content = 'first  line second line'
}"""
        afx = """<p>
            first  line
            second line
        </p>"""
        assert convert_afx_to_fusion(afx) == expected


class TestSpreads:
    def test_spreads_are_evaluated_for_fusion_objects(self):
        expected = """\
Vendor.Site:Prototype {
    @apply.spread_1 = ${spreadExpression}
}"""
        assert convert_afx_to_fusion("<Vendor.Site:Prototype {...spreadExpression} />") == expected

    def test_spreads_can_mix_with_props_for_fusion_objects(self):
        expected = """\
Vendor.Site:Prototype {
    stringBefore = 'string'
    expressionBefore = ${expression}
    @apply.spread_1 = ${spreadExpression}
    @apply.spread_2 = Neos.Fusion:DataStructure {
        stringAfter = 'string'
        expressionAfter = ${expression}
    }
}"""
        afx = (
            '<Vendor.Site:Prototype stringBefore="string" expressionBefore={expression} '
            '{...spreadExpression} stringAfter="string" expressionAfter={expression} />'
        )
        assert convert_afx_to_fusion(afx) == expected

    def test_spreads_are_evaluated_for_html_tags(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    selfClosingTag = true
    attributes.@apply.spread_1 = ${spreadExpression}
}"""
        assert convert_afx_to_fusion("<h1 {...spreadExpression} />") == expected

    def test_spreads_can_mix_with_props_for_html_tags(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'h1'
    selfClosingTag = true
    attributes.stringBefore = 'string'
    attributes.expressionBefore = ${expression}
    attributes.@apply.spread_1 = ${spreadExpression}
    attributes.@apply.spread_2 = Neos.Fusion:DataStructure {
        stringAfter = 'string'
        expressionAfter = ${expression}
    }
}"""
        afx = (
            '<h1 stringBefore="string" expressionBefore={expression} '
            '{...spreadExpression} stringAfter="string" expressionAfter={expression} />'
        )
        assert convert_afx_to_fusion(afx) == expected

    def test_props_between_spreads_are_grouped_before_the_next_spread(self):
        expected = """\
Vendor.Site:Prototype {
    propA = 'a'
    @apply.spread_1 = ${spread1}
    @apply.spread_2 = Neos.Fusion:DataStructure {
        propB = 'b'
    }
    @apply.spread_3 = ${spread2}
}"""
        afx = '<Vendor.Site:Prototype propA="a" {...spread1} propB="b" {...spread2} />'
        assert convert_afx_to_fusion(afx) == expected

    def test_adjacent_spreads_are_direct_expressions(self):
        expected = """\
Vendor.Site:Prototype {
    @apply.spread_1 = ${first}
    @apply.spread_2 = ${second}
}"""
        assert convert_afx_to_fusion("<Vendor.Site:Prototype {...first} {...second} />") == expected


class TestMetaAttributes:
    def test_meta_attributes_are_rendered_after_props_and_spreads(self):
        expected = """\
Vendor.Site:Prototype {
    foo = 'bar'
    @apply.spread_1 = ${spread}
    @apply.spread_2 = Neos.Fusion:DataStructure {
        baz = ${1}
    }
    @if.has = ${x}
    @position = 'end'
}"""
        afx = '<Vendor.Site:Prototype @if.has={x} foo="bar" {...spread} @position="end" baz={1} />'
        assert convert_afx_to_fusion(afx) == expected

    def test_shorthand_meta_paths_are_numbered(self):
        expected = """\
Vendor.Site:Prototype {
    @if.if_1 = ${condition}
    @process.process_1 = ${value + 1}
    @if.if_2 = ${other}
}"""
        afx = "<Vendor.Site:Prototype @if={condition} @process={value + 1} @if={other} />"
        assert convert_afx_to_fusion(afx) == expected

    def test_named_meta_paths_are_not_expanded(self):
        expected = """\
Vendor.Site:Prototype {
    @if.hasX = ${x}
    @position = 'start'
}"""
        assert convert_afx_to_fusion('<Vendor.Site:Prototype @if.hasX={x} @position="start" />') == expected

    def test_shorthand_meta_paths_on_html_tags(self):
        expected = """\
Neos.Fusion:Tag {
    tagName = 'p'
    attributes.class = 'note'
    @if.if_1 = ${visible}
    content = 'Hi'
}"""
        assert convert_afx_to_fusion('<p @if={visible} class="note">Hi</p>') == expected


class TestEscaping:
    def test_single_quotes_are_escaped_in_attributes_and_children(self):
        expected = r"""Neos.Fusion:Tag {
    tagName = 'h1'
    attributes.class = 'foo\'bar'
    content = 'foo\'bar'
}"""
        assert convert_afx_to_fusion("<h1 class=\"foo'bar\" >foo'bar</h1>") == expected

    def test_slashes_in_text_nodes_are_preserved(self):
        expected = r"""Neos.Fusion:Tag {
    tagName = 'h1'
    content = '\\o/'
}"""
        assert convert_afx_to_fusion(r"<h1>\o/</h1>") == expected

    def test_texts_are_escaped(self):
        expected = r"""Neos.Fusion:Tag {
    tagName = 'h1'
    content = 'foo\'bar\\baz\"bam'
}"""
        assert convert_afx_to_fusion(r"""<h1>foo'bar\baz"bam</h1>""") == expected


def unescape_string_literal(literal: str) -> str:
    """Read back a single-quoted Fusion string emitted by the generator."""
    assert literal.startswith("'") and literal.endswith("'")
    return re.sub(r"\\(.)", lambda m: "\0" if m.group(1) == "0" else m.group(1), literal[1:-1], flags=re.DOTALL)


ESCAPED_VALUES = [
    "foo'bar",
    "back\\slash",
    'say "hi"',
    "nul\0byte",
    "a literal \\0 sequence",
    "trailing\\",
    "all 'of\\ \"them\0",
]


class TestEscapedStringsReadBack:
    @pytest.mark.parametrize("value", ESCAPED_VALUES)
    def test_text_children(self, value):
        fusion = convert_afx_to_fusion(f"<h1>{value}</h1>")
        content = next(line for line in fusion.splitlines() if line.startswith("    content = "))
        assert unescape_string_literal(content.removeprefix("    content = ")) == value

    @pytest.mark.parametrize("value", ESCAPED_VALUES)
    def test_attribute_values(self, value):
        quoted = value.replace("\\", "\\\\").replace('"', '\\"')
        fusion = convert_afx_to_fusion(f'<h1 title="{quoted}" />')
        attribute = next(line for line in fusion.splitlines() if line.startswith("    attributes.title = "))
        assert unescape_string_literal(attribute.removeprefix("    attributes.title = ")) == value


class TestErrors:
    @pytest.mark.parametrize(
        "afx",
        [
            "<h1>",
            '<h1 foo="bar />',
            '<h1 foo={"123" />',
            "<h1 {...expression />",
            "<h1></h2>",
            "<h1><!-- never closed </h1>",
        ],
        ids=["unclosed_tag", "unclosed_attribute", "unclosed_expression", "unclosed_spread", "mismatched_tag", "unclosed_comment"],
    )
    def test_malformed_afx_raises_parse_error(self, afx):
        with pytest.raises(AfxParseError):
            convert_afx_to_fusion(afx)

    def test_child_path_with_expression_raises(self):
        with pytest.raises(FusionGenerationError, match="@path only supports string payloads, expression found"):
            convert_afx_to_fusion("<div><span @path={expression} /></div>")

    def test_key_with_expression_raises(self):
        with pytest.raises(FusionGenerationError, match="@key only supports string payloads, expression found"):
            convert_afx_to_fusion("<div><span @key={expression} /><span/></div>")

    def test_children_with_expression_raises(self):
        with pytest.raises(FusionGenerationError, match="@children only supports string payloads, expression found"):
            convert_afx_to_fusion("<div @children={expression} ><span/></div>")

    def test_parse_errors_are_not_generation_errors(self):
        with pytest.raises(AfxParseError) as exc_info:
            convert_afx_to_fusion("<h1>")
        assert not isinstance(exc_info.value, FusionGenerationError)

    def test_deeply_nested_tags_raise_parse_error(self):
        afx = "<div>" * 5000 + "</div>" * 5000
        with pytest.raises(AfxParseError, match="nested too deeply"):
            convert_afx_to_fusion(afx)
