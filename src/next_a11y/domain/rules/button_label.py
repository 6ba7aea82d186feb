"""button-label: buttons need an accessible name."""

from next_a11y.domain.entities import RuleType
from next_a11y.domain.rules.accessible_name import AccessibleNameRule
from next_a11y.domain.source import SourceFile


class ButtonLabelRule(AccessibleNameRule):
    """Icon-only and empty ``<button>`` elements get an ``aria-label``."""

    id = "button-label"
    type = RuleType.AI
    description = "Buttons must have an accessible name"
    term = "Button"
    message = "Button has no accessible name"

    def tags(self, file: SourceFile) -> tuple[str, ...]:
        return ("button",)
