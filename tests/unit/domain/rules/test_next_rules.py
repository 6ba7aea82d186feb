"""Tests for the Next.js-specific rules and html-lang."""

from next_a11y.domain.deferred import DeferredResolver
from next_a11y.domain.entities import Deferred, FixType, Literal
from next_a11y.domain.rules.html_lang import HtmlLangRule
from next_a11y.domain.rules.next_image_sizes import NextImageSizesRule
from next_a11y.domain.rules.next_link_no_nested_a import NextLinkNoNestedARule
from next_a11y.domain.rules.next_metadata_title import NextMetadataTitleRule
from next_a11y.domain.rules.next_skip_nav import NextSkipNavRule

from tests.a11y_test_utils import run_rule

ABOUT_PAGE = "export default function AboutPage() {\n  return <h1>About us</h1>;\n}\n"

ROOT_LAYOUT = (
    "export default function RootLayout({ children }) {\n"
    "  return (\n"
    "    <html>\n"
    "      <body>{children}</body>\n"
    "    </html>\n"
    "  );\n"
    "}\n"
)


class TestNextMetadataTitleRule:
    """Test metadata.title detection on App Router pages."""

    def test_page_without_metadata(self) -> None:
        """Test that a page without metadata gets an insert-metadata fix."""
        violations = run_rule(NextMetadataTitleRule(), ABOUT_PAGE, path="app/about/page.tsx")

        assert len(violations) == 1
        violation = violations[0]
        assert (violation.line, violation.column) == (1, 1)
        assert violation.fix is not None
        assert violation.fix.type is FixType.INSERT_METADATA
        assert violation.fix.value == Deferred("page-title", {"route": "/about", "component": "AboutPage"})
        assert DeferredResolver.resolve(violation.fix) == "About"

    def test_page_with_title_passes(self) -> None:
        """Test that an exported metadata object with a title passes."""
        source = 'export const metadata = { title: "About" };\n\n' + ABOUT_PAGE
        assert run_rule(NextMetadataTitleRule(), source, path="app/about/page.tsx") == []

    def test_typed_metadata_without_title_is_flagged(self) -> None:
        """Test that metadata lacking a title key is still flagged."""
        source = (
            'import type { Metadata } from "next";\n\n'
            'export const metadata: Metadata = { description: "Who we are" };\n\n'
            + ABOUT_PAGE
        )
        assert len(run_rule(NextMetadataTitleRule(), source, path="app/about/page.tsx")) == 1

    def test_generate_metadata_is_trusted(self) -> None:
        """Test that pages exporting generateMetadata are skipped."""
        source = "export async function generateMetadata() {\n  return {};\n}\n\n" + ABOUT_PAGE
        assert run_rule(NextMetadataTitleRule(), source, path="app/about/page.tsx") == []

    def test_non_page_files_are_ignored(self) -> None:
        """Test that only page files are checked."""
        assert run_rule(NextMetadataTitleRule(), ABOUT_PAGE, path="components/About.tsx") == []


class TestHtmlLangRule:
    """Test the lang attribute check on root documents."""

    def test_layout_html_without_lang(self) -> None:
        """Test that <html> without lang gets the locale's base language."""
        violations = run_rule(HtmlLangRule(locale="pl-PL"), ROOT_LAYOUT, path="app/layout.tsx")

        assert len(violations) == 1
        assert violations[0].element == "<html>"
        assert violations[0].fix is not None
        assert violations[0].fix.value == Literal("pl")

    def test_html_with_lang_passes(self) -> None:
        """Test that an existing lang attribute passes."""
        source = ROOT_LAYOUT.replace("<html>", '<html lang="en">')
        assert run_rule(HtmlLangRule(), source, path="app/layout.tsx") == []

    def test_non_document_files_are_ignored(self) -> None:
        """Test that only layouts and _document are checked."""
        assert run_rule(HtmlLangRule(), ROOT_LAYOUT, path="components/Shell.tsx") == []
        assert len(run_rule(HtmlLangRule(), ROOT_LAYOUT, path="pages/_document.tsx")) == 1


class TestNextSkipNavRule:
    """Test the skip link check on root layouts."""

    def test_layout_without_skip_link(self) -> None:
        """Test that a layout without a skip link is reported once, without a fix."""
        violations = run_rule(NextSkipNavRule(), ROOT_LAYOUT, path="app/layout.tsx")

        assert len(violations) == 1
        assert violations[0].fix is None
        assert violations[0].message == "Root layout is missing a skip navigation link"

    def test_main_content_href_passes(self) -> None:
        """Test that a link to #main-content is a skip link."""
        source = ROOT_LAYOUT.replace("<body>", '<body><a href="#main-content" className="sr-only">Jump</a>')
        assert run_rule(NextSkipNavRule(), source, path="app/layout.tsx") == []

    def test_skip_text_passes(self) -> None:
        """Test that link text mentioning "skip" is a skip link."""
        source = ROOT_LAYOUT.replace("<body>", '<body><a href="#content">Skip to content</a>')
        assert run_rule(NextSkipNavRule(), source, path="app/layout.tsx") == []

    def test_pages_are_ignored(self) -> None:
        """Test that non-layout files are not checked."""
        assert run_rule(NextSkipNavRule(), ABOUT_PAGE, path="app/page.tsx") == []


class TestNextImageSizesRule:
    """Test the sizes check on <Image fill>."""

    IMPORT = 'import Image from "next/image";\n\n'

    def test_fill_without_sizes(self) -> None:
        """Test that fill without sizes is a warning."""
        source = self.IMPORT + 'export const Cover = () => <Image src="/cover.jpg" alt="Cover" fill />;\n'
        violations = run_rule(NextImageSizesRule(), source)

        assert len(violations) == 1
        assert violations[0].fix is None
        assert violations[0].element == "<Image>"

    def test_fill_with_sizes_passes(self) -> None:
        """Test that sizes satisfies the rule."""
        source = self.IMPORT + 'export const Cover = () => <Image src="/c.jpg" alt="Cover" fill sizes="100vw" />;\n'
        assert run_rule(NextImageSizesRule(), source) == []

    def test_fixed_size_image_passes(self) -> None:
        """Test that images without fill are ignored."""
        source = self.IMPORT + 'export const Cover = () => <Image src="/c.jpg" alt="Cover" width={200} height={100} />;\n'
        assert run_rule(NextImageSizesRule(), source) == []


class TestNextLinkNoNestedARule:
    """Test nested anchors inside next/link."""

    def test_link_wrapping_anchor(self) -> None:
        """Test that <Link><a></a></Link> is flagged with a remove fix."""
        source = (
            'import Link from "next/link";\n'
            "\n"
            'export const Nav = () => <Link href="/about"><a className="nav">About</a></Link>;\n'
        )
        violations = run_rule(NextLinkNoNestedARule(), source)

        assert len(violations) == 1
        assert violations[0].element == "<Link>"
        assert violations[0].fix is not None
        assert violations[0].fix.type is FixType.REMOVE_ELEMENT

    def test_remove_fix_carries_no_marker_text(self) -> None:
        """Test that the JSON fix value is an empty literal."""
        source = (
            'import Link from "next/link";\n'
            "\n"
            'export const Nav = () => <Link href="/about"><a>About</a></Link>;\n'
        )
        violation = run_rule(NextLinkNoNestedARule(), source)[0]

        assert violation.to_dict()["fix"]["value"] == {"kind": "literal", "text": ""}
        assert violation.tag == "Link"

    def test_link_without_anchor_passes(self) -> None:
        """Test that a plain <Link> passes."""
        source = 'import Link from "next/link";\n\nexport const Nav = () => <Link href="/about">About</Link>;\n'
        assert run_rule(NextLinkNoNestedARule(), source) == []

    def test_without_next_link_import(self) -> None:
        """Test that a local Link component is ignored."""
        source = 'export const Nav = () => <Link href="/about"><a>About</a></Link>;\n'
        assert run_rule(NextLinkNoNestedARule(), source) == []
