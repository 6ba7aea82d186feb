"""Unit tests for page context, loop variables and icon lookups."""

import pytest

from next_a11y.domain.context import ContextExtractor
from next_a11y.domain.icon_labels import DEFAULT_ICON_CLASSIFIER, IconClassifier, IconLabels
from next_a11y.domain.label_variable import LabelVariableFinder

from tests.a11y_test_utils import parse_source


class TestContextExtractor:
    """Test component name, route and heading extraction."""

    @pytest.mark.parametrize(
        ("path", "route"),
        [
            ("app/page.tsx", "/"),
            ("app/blog/page.tsx", "/blog"),
            ("src/app/(shop)/cart/page.tsx", "/(shop)/cart"),
            ("pages/index.tsx", "/"),
            ("pages/about.tsx", "/about"),
            ("pages/docs/index.jsx", "/docs"),
            ("components/Header.tsx", None),
        ],
    )
    def test_route(self, path: str, route: object) -> None:
        """Test that App Router and Pages Router paths map to routes."""
        assert ContextExtractor.route(path) == route

    def test_default_export_function_name(self) -> None:
        """Test that the default export wins."""
        source = "export function Helper() { return null; }\nexport default function HomePage() { return <h1>Hi</h1>; }\n"
        assert ContextExtractor.component_name(parse_source(source)) == "HomePage"

    def test_default_export_identifier(self) -> None:
        """Test that ``export default Name`` is resolved."""
        source = "const Pricing = () => <h1>Pricing</h1>;\nexport default Pricing;\n"
        assert ContextExtractor.component_name(parse_source(source)) == "Pricing"

    def test_exported_const_and_file_stem_fallbacks(self) -> None:
        """Test the exported-const and file-name fallbacks."""
        exported = parse_source("export const Card = () => <div />;\n")
        anonymous = parse_source("const x = <div />;\n", path="components/profileCard.tsx")

        assert ContextExtractor.component_name(exported) == "Card"
        assert ContextExtractor.component_name(anonymous) == "ProfileCard"

    def test_extract_collects_headings(self) -> None:
        """Test that headings are listed in document order with their level."""
        source = (
            "export default function Docs() {\n"
            "  return (\n"
            "    <main>\n"
            "      <h1>Guides</h1>\n"
            "      <h2>Getting <em>started</em></h2>\n"
            "      <h3></h3>\n"
            "    </main>\n"
            "  );\n"
            "}\n"
        )
        context = ContextExtractor.extract(parse_source(source, path="app/docs/page.tsx"))

        assert context.component_name == "Docs"
        assert context.route == "/docs"
        assert context.nearby_headings == ["h1: Guides", "h2: Getting started"]


class TestLabelVariableFinder:
    """Test loop-variable discovery for labels inside list callbacks."""

    def test_prefers_label_property(self) -> None:
        """Test that ``label`` beats other properties."""
        source = (
            "export const Toc = ({ sections }) => (\n"
            "  <nav>{sections.map((section) => <a key={section.id} href={section.href}><HashIcon />{section.label}</a>)}</nav>\n"
            ");\n"
        )
        file = parse_source(source)
        anchor = file.jsx_elements("a")[0]

        assert LabelVariableFinder.find(anchor) == "section.label"

    def test_outside_iteration_returns_none(self) -> None:
        """Test that elements outside a list callback have no variable."""
        file = parse_source("export const B = ({ item }) => <button>{item.label}</button>;\n")
        assert LabelVariableFinder.find(file.jsx_elements("button")[0]) is None

    def test_unparenthesized_parameter(self) -> None:
        """Test that ``item => ...`` callbacks are supported."""
        file = parse_source("export const L = ({ xs }) => <ul>{xs.map(x => <li key={x.id}>{x.title}</li>)}</ul>;\n")
        assert LabelVariableFinder.find(file.jsx_elements("li")[0]) == "x.title"

    def test_wrap(self) -> None:
        """Test the template-literal expression produced for labels."""
        assert LabelVariableFinder.wrap("Go to", "s.label") == "{`Go to ${s.label}`}"

    def test_wrap_escapes_template_syntax(self) -> None:
        """Test that template-literal syntax in the label stays literal."""
        wrapped = LabelVariableFinder.wrap("Use `npm` ${cost} C:\\dir", "s.label")
        assert wrapped == "{`Use \\`npm\\` \\${cost} C:\\\\dir ${s.label}`}"


class TestIconLabels:
    """Test curated label lookups."""

    def test_curated_with_region_locale(self) -> None:
        """Test that regional locales use the base language table."""
        assert IconLabels.curated("HeartIcon", "de-AT") == "Zu Favoriten hinzufügen"

    def test_curated_falls_back_to_english(self) -> None:
        """Test that icons missing from a locale table use English."""
        assert IconLabels.curated("BellIcon", "fr") == "Notifications"

    def test_unknown_icon_is_not_curated(self) -> None:
        """Test that unknown icons return None."""
        assert IconLabels.curated("RocketIcon", "en") is None

    def test_label_uses_offline_table_then_humanizes(self) -> None:
        """Test the offline fallback order."""
        assert IconLabels.label("DownloadIcon", "en") == "Download"
        assert IconLabels.label("ArrowUpRightIcon", "en") == "Arrow up right"


class TestIconClassifier:
    """Test icon-shape classification."""

    def test_icon_name_skips_svg_parts(self) -> None:
        """Test that bare svg markup has no icon name."""
        file = parse_source('export const B = () => <button><svg><path d="M0" /></svg></button>;\n')
        button = file.jsx_elements("button")[0]

        assert DEFAULT_ICON_CLASSIFIER.icon_name(button) is None

    def test_pascal_case_components_count_as_icons(self) -> None:
        """Test that PascalCase children are icons unless disabled."""
        file = parse_source("export const B = () => <button><Sparkles /></button>;\n")
        button = file.jsx_elements("button")[0]

        assert DEFAULT_ICON_CLASSIFIER.icon_name(button) == "Sparkles"
        assert IconClassifier(pascal_case_is_icon=False).icon_name(button) is None

    def test_non_icon_components(self) -> None:
        """Test that Image and Link are never icons."""
        assert DEFAULT_ICON_CLASSIFIER.is_icon_tag("Image") is False
        assert DEFAULT_ICON_CLASSIFIER.is_icon_tag("ChevronIcon") is True
