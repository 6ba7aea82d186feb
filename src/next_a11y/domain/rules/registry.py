"""Rule registry: every rule class, built against the resolved configuration."""

from typing import TYPE_CHECKING

from next_a11y.domain.icon_labels import DEFAULT_ICON_CLASSIFIER, IconClassifier
from next_a11y.domain.rules import BaseRule
from next_a11y.domain.rules.button_label import ButtonLabelRule
from next_a11y.domain.rules.button_type import ButtonTypeRule
from next_a11y.domain.rules.emoji_alt import EmojiAltRule
from next_a11y.domain.rules.heading_order import HeadingOrderRule
from next_a11y.domain.rules.html_lang import HtmlLangRule
from next_a11y.domain.rules.img_alt import ImgAltRule
from next_a11y.domain.rules.input_label import InputLabelRule
from next_a11y.domain.rules.link_label import LinkLabelRule
from next_a11y.domain.rules.link_noopener import LinkNoopenerRule
from next_a11y.domain.rules.next_image_sizes import NextImageSizesRule
from next_a11y.domain.rules.next_link_no_nested_a import NextLinkNoNestedARule
from next_a11y.domain.rules.next_metadata_title import NextMetadataTitleRule
from next_a11y.domain.rules.next_skip_nav import NextSkipNavRule
from next_a11y.domain.rules.no_div_interactive import NoDivInteractiveRule
from next_a11y.domain.rules.no_positive_tabindex import NoPositiveTabindexRule

if TYPE_CHECKING:
    from next_a11y.domain.config import ResolvedConfig

RULE_CLASSES: tuple[type[BaseRule], ...] = (
    ImgAltRule,
    ButtonLabelRule,
    LinkLabelRule,
    InputLabelRule,
    NextMetadataTitleRule,
    HtmlLangRule,
    EmojiAltRule,
    LinkNoopenerRule,
    ButtonTypeRule,
    NoPositiveTabindexRule,
    NextLinkNoNestedARule,
    NextSkipNavRule,
    NextImageSizesRule,
    HeadingOrderRule,
    NoDivInteractiveRule,
)

RULES_BY_ID: dict[str, type[BaseRule]] = {rule.id: rule for rule in RULE_CLASSES}


class RuleRegistry:
    """Builds the active rule set for one run."""

    @staticmethod
    def build(
        config: "ResolvedConfig",
        icon_classifier: IconClassifier = DEFAULT_ICON_CLASSIFIER,
    ) -> list[BaseRule]:
        """Instantiate every rule the configuration enables, in registration order."""
        return [
            rule_class(config.rule(rule_class.id), config.locale, icon_classifier)
            for rule_class in RULE_CLASSES
            if config.is_enabled(rule_class.id, rule_class.type)
        ]
