"""Tests for lifeos/markdown.py: line scanner and text primitives."""

from lifeos.markdown import (
    BLANK,
    BLOCKQUOTE,
    CHECKBOX,
    HEADING,
    RULE,
    TABLE,
    TEXT,
    blockquote_lines,
    clean_value,
    escape_line,
    extract_blockquote,
    extract_section,
    free_text_lines,
    has_prompt,
    is_blank,
    is_placeholder,
    scan,
    section_bounds,
    text_after_prompt,
    unescape_line,
)


def test_scan_classifies_lines():
    text = "## Title\n---\n> quote\n- [x] box\n| a | b |\n\nplain"
    kinds = [line.kind for line in scan(text)]
    assert kinds == [HEADING, RULE, BLOCKQUOTE, CHECKBOX, TABLE, BLANK, TEXT]


def test_scan_heading_level_and_title():
    line = scan("### Deep heading  ")[0]
    assert line.level == 3
    assert line.title == "Deep heading"


def test_scan_empty():
    assert scan("") == []
    assert scan(None) == []


def test_placeholder():
    assert is_placeholder("[Your win]")
    assert is_placeholder("  [YYYY-MM-DD]  ")
    assert is_placeholder("[]")
    assert not is_placeholder("Shipped [v2]")
    assert not is_placeholder("text")


def test_is_blank_and_clean_value():
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank("[Your notes]")
    assert not is_blank("real")
    assert clean_value("  real  ") == "real"
    assert clean_value("[placeholder]") is None


def test_extract_section_stops_at_rule():
    text = "## One\nbody one\n---\n## Two\nbody two"
    assert extract_section(text, "One") == "body one"
    assert extract_section(text, "Two") == "body two"


def test_extract_section_stops_at_same_level_heading():
    text = "## One\nfirst\n### Sub\nnested\n## Two\nsecond"
    assert extract_section(text, "One") == "first\n### Sub\nnested"


def test_extract_section_case_insensitive_and_missing():
    text = "## One Meaningful Win\n> yes"
    assert extract_section(text, "one meaningful win") == "> yes"
    assert extract_section(text, "Missing") is None


def test_section_bounds_ignores_other_levels():
    lines = scan("# One\ntop\n## One\nbody")
    assert section_bounds(lines, "One") == (3, 4)


def test_extract_blockquote_joins_lines():
    section = "*helper*\n\n> first line\n>second line\n>\n> third"
    assert extract_blockquote(section) == "first line second line third"


def test_extract_blockquote_strips_one_space_only():
    assert extract_blockquote(">   indented") == "indented"


def test_extract_blockquote_absent_and_placeholder():
    assert extract_blockquote(None) is None
    assert extract_blockquote("no quotes here") is None
    assert extract_blockquote(">") is None
    assert extract_blockquote("> [Your win]") is None


def test_text_after_prompt_keeps_newlines():
    section = "*Anything else worth capturing?*\n\nline one\nline two\n"
    assert text_after_prompt(section, "*Anything else worth capturing?*") == "line one\nline two"


def test_text_after_prompt_missing_prompt():
    assert text_after_prompt("just text", "What's affecting your energy today?") is None
    assert text_after_prompt(None, "prompt") is None


def test_has_prompt_ignores_emphasis():
    assert has_prompt("Anything else worth capturing?", "*Anything else worth capturing?*")
    assert not has_prompt("other", "*Anything else worth capturing?*")


def test_blockquote_lines():
    assert blockquote_lines(None) == [">"]
    assert blockquote_lines("  ") == [">"]
    assert blockquote_lines("one\n\ntwo") == ["> one", ">", "> two"]


def test_escape_line_only_touches_section_breakers():
    assert escape_line("---") == "\\---"
    assert escape_line("## Heading") == "\\## Heading"
    assert escape_line("\\plain") == "\\\\plain"
    assert escape_line("ordinary text") == "ordinary text"
    assert escape_line("#hashtag") == "#hashtag"


def test_unescape_line_inverts_escape():
    for line in ("---", "  ***", "# Title", "\\x", "text", ""):
        assert unescape_line(escape_line(line)) == line


def test_free_text_lines():
    assert free_text_lines(None) == [""]
    assert free_text_lines("a\n---\nb") == ["a", "\\---", "b"]


def test_text_after_prompt_unescapes():
    section = "Prompt?\n\nfirst\n\\---\nlast"
    assert text_after_prompt(section, "Prompt?") == "first\n---\nlast"
