"""Tests for emoji-alt, link-noopener, button-type and no-positive-tabindex."""

import pytest

from next_a11y.domain.config import RuleConfig
from next_a11y.domain.entities import FixType, Literal, RuleLevel
from next_a11y.domain.rules.button_type import NATIVE_MESSAGE, ButtonTypeRule
from next_a11y.domain.rules.emoji_alt import EmojiAltRule
from next_a11y.domain.rules.link_noopener import LinkNoopenerRule
from next_a11y.domain.rules.no_positive_tabindex import NoPositiveTabindexRule

from tests.a11y_test_utils import parse_source, run_rule


class TestEmojiAltRule:
    """Test emoji detection in JSX text."""

    def test_emoji_in_text_is_flagged_with_name(self) -> None:
        """Test that each emoji gets a wrap fix carrying its name."""
        source = "export const Launch = () => <p>Launch 🚀 now</p>;\n"
        file = parse_source(source)
        violations = EmojiAltRule().scan(file)

        assert len(violations) == 1
        violation = violations[0]
        assert violation.element == "🚀"
        assert violation.fix is not None
        assert violation.fix.type is FixType.WRAP_ELEMENT
        assert violation.fix.value == Literal("rocket")
        assert violation.anchor is not None
        assert file.data[violation.anchor:violation.anchor + 4] == "🚀".encode("utf-8")
        assert violation.column == source.index("🚀") + 1

    def test_multiple_emoji_in_one_text(self) -> None:
        """Test that every emoji sequence is reported separately."""
        source = "export const Party = () => <p>🎉 Done ✅</p>;\n"
        violations = run_rule(EmojiAltRule(), source)

        assert [v.element for v in violations] == ["🎉", "✅"]

    def test_unknown_emoji_uses_generic_name(self) -> None:
        """Test that emoji missing from the name table are still labelled."""
        violations = run_rule(EmojiAltRule(), "export const Odd = () => <p>🦩</p>;\n")

        assert violations[0].fix is not None
        assert violations[0].fix.value == Literal("emoji")

    def test_labelled_span_passes(self) -> None:
        """Test that an already wrapped emoji is not flagged again."""
        source = 'export const Ok = () => <p><span role="img" aria-label="rocket">🚀</span></p>;\n'
        assert run_rule(EmojiAltRule(), source) == []

    def test_plain_text_passes(self) -> None:
        """Test that text without emoji passes."""
        assert run_rule(EmojiAltRule(), "export const T = () => <p>Hello (c) 2024</p>;\n") == []


class TestLinkNoopenerRule:
    """Test rel checks on target=_blank links."""

    def test_missing_rel(self) -> None:
        """Test that a missing rel gets an insert fix."""
        source = 'export const Gh = () => <a href="https://github.com" target="_blank">GitHub</a>;\n'
        violations = run_rule(LinkNoopenerRule(), source)

        assert len(violations) == 1
        assert violations[0].fix is not None
        assert violations[0].fix.type is FixType.INSERT_ATTR
        assert violations[0].fix.value == Literal("noopener noreferrer")
        assert violations[0].element == '<a href="https://github.com" target="_blank">'

    def test_partial_rel_is_merged(self) -> None:
        """Test that existing rel tokens are kept."""
        source = 'export const Gh = () => <a href="/x" target="_blank" rel="nofollow">X</a>;\n'
        violations = run_rule(LinkNoopenerRule(), source)

        assert violations[0].fix is not None
        assert violations[0].fix.type is FixType.REPLACE_ATTR
        assert violations[0].fix.value == Literal("nofollow noopener noreferrer")

    def test_complete_rel_passes(self) -> None:
        """Test that both tokens in any order pass."""
        source = 'export const Gh = () => <a href="/x" target="_blank" rel="noreferrer noopener">X</a>;\n'
        assert run_rule(LinkNoopenerRule(), source) == []

    def test_dynamic_rel_is_left_alone(self) -> None:
        """Test that a rel expression is not second-guessed."""
        source = 'export const Gh = ({ rel }) => <a href="/x" target="_blank" rel={rel}>X</a>;\n'
        assert run_rule(LinkNoopenerRule(), source) == []

    def test_same_tab_links_pass(self) -> None:
        """Test that links without target=_blank are ignored."""
        assert run_rule(LinkNoopenerRule(), 'export const A = () => <a href="/x">X</a>;\n') == []

    def test_merge_rel(self) -> None:
        """Test that merge_rel only appends missing tokens."""
        assert LinkNoopenerRule.merge_rel("") == "noopener noreferrer"
        assert LinkNoopenerRule.merge_rel("noreferrer") == "noreferrer noopener"


class TestButtonTypeRule:
    """Test explicit button types."""

    def test_native_button_without_type(self) -> None:
        """Test that <button> without type gets type="button"."""
        violations = run_rule(ButtonTypeRule(), "export const B = () => <button>Go</button>;\n")

        assert len(violations) == 1
        assert violations[0].message == NATIVE_MESSAGE
        assert violations[0].fix is not None
        assert violations[0].fix.value == Literal("button")

    def test_button_with_type_passes(self) -> None:
        """Test that any explicit type passes."""
        assert run_rule(ButtonTypeRule(), 'export const B = () => <button type="submit">Go</button>;\n') == []

    def test_custom_components_ignored_by_default(self) -> None:
        """Test that PascalCase button components are only checked on request."""
        source = "export const B = () => <IconButton>Go</IconButton>;\n"
        assert run_rule(ButtonTypeRule(), source) == []

        config = RuleConfig(level=RuleLevel.WARN, options={"scanCustomComponents": True})
        violations = run_rule(ButtonTypeRule(config), source)
        assert len(violations) == 1
        assert violations[0].fix is None
        assert violations[0].element == "<IconButton>"


class TestNoPositiveTabindexRule:
    """Test positive tabIndex detection."""

    @pytest.mark.parametrize("attribute", ["tabIndex={3}", 'tabIndex="3"'])
    def test_positive_values_are_flagged(self, attribute: str) -> None:
        """Test that numeric and string positive values are reported."""
        source = f"export const D = () => <div {attribute}>x</div>;\n"
        violations = run_rule(NoPositiveTabindexRule(), source)

        assert len(violations) == 1
        assert violations[0].element == "div"
        assert "(3)" in violations[0].message
        assert violations[0].column == source.index("tabIndex") + 1
        assert violations[0].fix is not None
        assert violations[0].fix.value == Literal("0")

    @pytest.mark.parametrize("attribute", ["tabIndex={0}", "tabIndex={-1}", "tabIndex={order}"])
    def test_zero_negative_and_dynamic_pass(self, attribute: str) -> None:
        """Test that 0, -1 and expressions are not flagged."""
        source = f"export const D = ({{ order }}) => <div {attribute}>x</div>;\n"
        assert run_rule(NoPositiveTabindexRule(), source) == []
