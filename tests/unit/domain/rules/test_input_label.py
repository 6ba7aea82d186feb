"""Tests for the input-label rule."""

import pytest

from next_a11y.domain.deferred import DeferredResolver
from next_a11y.domain.rules.input_label import InputLabelRule

from tests.a11y_test_utils import run_rule


def _component(markup: str) -> str:
    return f"export function Form() {{\n  return (\n    {markup}\n  );\n}}\n"


class TestInputLabelRule:
    """Test detection of unlabelled form controls."""

    def test_unlabelled_input_uses_placeholder(self) -> None:
        """Test that the placeholder becomes the fallback label."""
        violations = run_rule(InputLabelRule(), _component('<input type="email" placeholder="Email address" />'))

        assert len(violations) == 1
        assert violations[0].message == "<input> is missing an associated label"
        fix = violations[0].fix
        assert fix is not None
        assert fix.attribute == "aria-label"
        assert DeferredResolver.resolve(fix) == "Email address"

    def test_name_is_humanized_when_no_placeholder(self) -> None:
        """Test that a camelCase name is turned into words."""
        violations = run_rule(InputLabelRule(), _component('<input name="firstName" />'))

        fix = violations[0].fix
        assert fix is not None
        assert DeferredResolver.resolve(fix) == "First Name"

    def test_select_and_textarea_defaults(self) -> None:
        """Test the generic labels for bare select and textarea elements."""
        violations = run_rule(InputLabelRule(), _component("<div><select></select><textarea /></div>"))

        labels = [DeferredResolver.resolve(v.fix) for v in violations if v.fix is not None]
        assert labels == ["Select option", "Text input"]

    @pytest.mark.parametrize("input_type", ["hidden", "submit", "button", "reset", "image"])
    def test_inputs_that_need_no_label_are_skipped(self, input_type: str) -> None:
        """Test that hidden and button-like inputs are ignored."""
        assert run_rule(InputLabelRule(), _component(f'<input type="{input_type}" />')) == []

    def test_label_with_html_for_passes(self) -> None:
        """Test that <label htmlFor> associates with the input id."""
        markup = '<div><label htmlFor="email">Email</label><input id="email" /></div>'
        assert run_rule(InputLabelRule(), _component(markup)) == []

    def test_wrapping_label_passes(self) -> None:
        """Test that an input nested in a label is associated."""
        markup = '<label>Name <input name="fullName" /></label>'
        assert run_rule(InputLabelRule(), _component(markup)) == []

    def test_aria_label_passes(self) -> None:
        """Test that aria-label names the control."""
        assert run_rule(InputLabelRule(), _component('<input aria-label="Search" />')) == []

    def test_mismatched_html_for_is_flagged(self) -> None:
        """Test that a label pointing at a different id does not count."""
        markup = '<div><label htmlFor="name">Name</label><input id="email" /></div>'
        assert len(run_rule(InputLabelRule(), _component(markup))) == 1
