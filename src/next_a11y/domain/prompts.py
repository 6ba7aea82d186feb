"""System and user prompts for generated alt text, labels and titles."""

from typing import Optional

from next_a11y.domain.entities import PageContext

IMG_ALT_SYSTEM_PROMPT = """You are an accessibility expert generating alt text for images following WCAG 2.1 guidelines.

Rules:
- Write 1-2 sentences, prefer under 125 characters
- Describe what the image SHOWS, not what it IS
- Never start with "Image of...", "Photo of...", "Picture of..."
- Include visible text, actions, and key details
- If the image is purely decorative (border, spacer, gradient), return exactly: ""
- Respect the target locale for the response language
- Be specific and contextual, use the page context provided"""

ARIA_LABEL_SYSTEM_PROMPT = """You are an accessibility expert. Generate an accessible aria-label for icon-only buttons and links.

Rules:
- Return ONLY the label text, nothing else
- Output MUST be in the language of the locale (e.g. Polish for pl, German for de)
- Use action-oriented phrasing: describe what happens when the user activates it, not what the icon looks like
- Keep it short: 2-5 words
- Use the icon name and component context to infer the action

Examples (follow these patterns):
- ShoppingCartIcon -> "Add to cart"
- HeartIcon -> "Add to favorites"
- ShareIcon -> "Share"
- XMarkIcon, close button -> "Close"
- Bars3Icon, menu -> "Open menu"
- MagnifyingGlassIcon -> "Search"
- TwitterIcon link -> "Visit Twitter" or "Visit X"
- Avoid bare nouns: "Cart" -> "Add to cart", "Twitter" -> "Visit Twitter\""""

METADATA_TITLE_SYSTEM_PROMPT = """You are an accessibility expert. Generate a concise page title for a Next.js page.

Rules:
- Return ONLY the title text, nothing else
- Keep it short: 1-4 words
- Output MUST be in the language of the locale
- Describe the page purpose, not the framework or component"""

_ELEMENT_TYPES = {"button-label": "button", "link-label": "link", "input-label": "input"}


class PromptBuilder:
    """Builds user prompts from page context."""

    @staticmethod
    def img_alt(context: PageContext, locale: str) -> str:
        parts = [
            "Generate WCAG-compliant alt text for this image.",
            f'Context: This image is in the "{context.component_name}" component.',
        ]
        if context.route:
            parts.append(f"Page route: {context.route}")
        if context.nearby_headings:
            parts.append(f"Nearby headings: {', '.join(context.nearby_headings)}")
        parts.append(f"Locale: {locale}")
        parts.append("Return ONLY the alt text string, nothing else.")
        return "\n".join(parts)

    @staticmethod
    def img_alt_without_image(context: PageContext, locale: str, source: str) -> str:
        """Prompt used when the image bytes could not be loaded."""
        return (
            PromptBuilder.img_alt(context, locale)
            + f"\nImage source: {source}"
            + "\nNote: Image could not be loaded, generate alt text based on context only."
        )

    @staticmethod
    def aria_label(
        rule: str,
        element: str,
        context: PageContext,
        locale: str,
        icon_name: Optional[str] = None,
    ) -> str:
        element_type = _ELEMENT_TYPES.get(rule, "input")
        prompt = f"Generate an aria-label for this icon-only {element_type}:\n\n"
        if icon_name:
            prompt += f"Icon component: {icon_name}\n"
        prompt += f"Element: {element}\n"
        prompt += f"Component: {context.component_name}\n"
        if context.route:
            prompt += f"Route: {context.route}\n"
        if context.nearby_headings:
            prompt += f"Nearby headings: {', '.join(context.nearby_headings)}\n"
        prompt += f"Locale: {locale}\n"
        prompt += '\nReturn ONLY the action-oriented label (e.g. "Add to cart", "Visit Twitter").'
        return prompt

    @staticmethod
    def metadata_title(context: PageContext, locale: str) -> str:
        headings = ", ".join(context.nearby_headings) if context.nearby_headings else "none"
        return (
            "Generate a page title for this Next.js page:\n\n"
            f"Component: {context.component_name}\n"
            f"Route: {context.route or '/'}\n"
            f"Headings on page: {headings}\n"
            f"Locale: {locale}\n\n"
            'Return ONLY the title text (e.g. "Home", "About Us", "Contact").'
        )
