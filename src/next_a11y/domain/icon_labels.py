"""Curated, locale-aware labels for icon components and icon-shape classification."""

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from next_a11y.domain.source import JsxElement

# Action-oriented labels: "Add to cart" rather than "Cart".
ICON_LABEL_OVERRIDES: dict[str, str] = {
    "CartIcon": "Add to cart",
    "HeartIcon": "Add to favorites",
    "ShareIcon": "Share",
    "TrashIcon": "Delete",
    "DeleteIcon": "Delete",
    "XIcon": "Close",
    "CloseIcon": "Close",
    "MenuIcon": "Menu",
    "HamburgerIcon": "Menu",
    "SearchIcon": "Search",
    "PlusIcon": "Add",
    "PencilIcon": "Edit",
    "EditIcon": "Edit",
    "GearIcon": "Settings",
    "SettingsIcon": "Settings",
    "ChevronLeftIcon": "Go back",
    "ChevronRightIcon": "Go forward",
    "ArrowLeftIcon": "Go back",
    "ArrowRightIcon": "Go forward",
    "MinusIcon": "Remove",
    "BellIcon": "Notifications",
    "UserIcon": "User profile",
    "LogoutIcon": "Log out",
    "LoginIcon": "Log in",
    "EyeIcon": "Show",
    "EyeOffIcon": "Hide",
    "CheckIcon": "Confirm",
    "MailIcon": "Email",
    "ExternalLinkIcon": "Open in new tab",
    "DotsVerticalIcon": "More options",
    "DotsHorizontalIcon": "More options",
    "HashIcon": "Go to section",
    "Hash": "Go to section",
    "SunIcon": "Light mode",
    "MoonIcon": "Dark mode",
    "TwitterIcon": "Visit Twitter",
    "InstagramIcon": "Visit Instagram",
    "FacebookIcon": "Visit Facebook",
    "LinkedInIcon": "Visit LinkedIn",
    "YoutubeIcon": "Visit YouTube",
    "GithubIcon": "Visit GitHub",
}

ICON_LABEL_OVERRIDES_LOCALE: dict[str, dict[str, str]] = {
    "pl": {
        "CartIcon": "Dodaj do koszyka",
        "HeartIcon": "Dodaj do ulubionych",
        "ShareIcon": "Udostępnij",
        "TrashIcon": "Usuń",
        "DeleteIcon": "Usuń",
        "XIcon": "Zamknij",
        "CloseIcon": "Zamknij",
        "MenuIcon": "Menu",
        "HamburgerIcon": "Menu",
        "SearchIcon": "Szukaj",
        "TwitterIcon": "Odwiedź Twittera",
        "InstagramIcon": "Odwiedź Instagrama",
        "FacebookIcon": "Odwiedź Facebooka",
        "LinkedInIcon": "Odwiedź LinkedIn",
        "GithubIcon": "Odwiedź GitHub",
    },
    "de": {
        "CartIcon": "In den Warenkorb",
        "HeartIcon": "Zu Favoriten hinzufügen",
        "ShareIcon": "Teilen",
        "TrashIcon": "Löschen",
        "DeleteIcon": "Löschen",
        "XIcon": "Schließen",
        "CloseIcon": "Schließen",
        "MenuIcon": "Menü",
        "HamburgerIcon": "Menü",
        "SearchIcon": "Suchen",
        "TwitterIcon": "Twitter besuchen",
        "InstagramIcon": "Instagram besuchen",
    },
    "es": {
        "CartIcon": "Añadir al carrito",
        "HeartIcon": "Añadir a favoritos",
        "ShareIcon": "Compartir",
        "TrashIcon": "Eliminar",
        "DeleteIcon": "Eliminar",
        "XIcon": "Cerrar",
        "CloseIcon": "Cerrar",
        "MenuIcon": "Menú",
        "SearchIcon": "Buscar",
        "TwitterIcon": "Visitar Twitter",
        "InstagramIcon": "Visitar Instagram",
    },
    "fr": {
        "CartIcon": "Ajouter au panier",
        "HeartIcon": "Ajouter aux favoris",
        "ShareIcon": "Partager",
        "TrashIcon": "Supprimer",
        "DeleteIcon": "Supprimer",
        "XIcon": "Fermer",
        "CloseIcon": "Fermer",
        "MenuIcon": "Menu",
        "SearchIcon": "Rechercher",
        "TwitterIcon": "Visiter Twitter",
        "InstagramIcon": "Visiter Instagram",
    },
}

# Offline fallbacks for icons without a curated label.
ICON_FALLBACK_LABELS: dict[str, str] = {
    "DownloadIcon": "Download",
    "UploadIcon": "Upload",
    "CopyIcon": "Copy",
    "RefreshIcon": "Refresh",
    "FilterIcon": "Filter",
    "SortIcon": "Sort",
    "ExpandIcon": "Expand",
    "CollapseIcon": "Collapse",
    "PlayIcon": "Play",
    "PauseIcon": "Pause",
    "StopIcon": "Stop",
    "MuteIcon": "Mute",
    "VolumeIcon": "Volume",
    "LockIcon": "Lock",
    "UnlockIcon": "Unlock",
    "InfoIcon": "Information",
    "HelpIcon": "Help",
    "WarningIcon": "Warning",
    "SaveIcon": "Save",
    "PrintIcon": "Print",
    "HomeIcon": "Home",
    "CalendarIcon": "Calendar",
    "ClockIcon": "Clock",
    "MapIcon": "Map",
    "PhoneIcon": "Phone",
    "SendIcon": "Send",
    "AttachIcon": "Attach",
    "LinkIcon": "Link",
    "MoreIcon": "More options",
    "GridIcon": "Grid view",
    "ListIcon": "List view",
    "StarIcon": "Star",
}

GENERIC_LABELS: dict[str, dict[str, str]] = {
    "en": {"Button": "Button", "Link": "Link"},
    "pl": {"Button": "Przycisk", "Link": "Link"},
    "de": {"Button": "Schaltfläche", "Link": "Link"},
    "es": {"Button": "Botón", "Link": "Enlace"},
    "fr": {"Button": "Bouton", "Link": "Lien"},
}

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


class IconLabels:
    """Lookups over the curated icon tables."""

    @staticmethod
    def base_locale(locale: str) -> str:
        return locale.replace("_", "-").split("-")[0].lower()

    @classmethod
    def curated(cls, icon_name: str, locale: str) -> Optional[str]:
        """Curated label for ``icon_name`` in ``locale``, falling back to English; None when unknown."""
        localized = ICON_LABEL_OVERRIDES_LOCALE.get(cls.base_locale(locale), {})
        if icon_name in localized:
            return localized[icon_name]
        return ICON_LABEL_OVERRIDES.get(icon_name)

    @staticmethod
    def humanize(icon_name: str) -> str:
        """RemoveCircleIcon -> 'Remove circle'."""
        name = icon_name[:-4] if icon_name.endswith("Icon") else icon_name
        name = _CAMEL_BOUNDARY.sub(r"\1 \2", name).lower()
        return name[:1].upper() + name[1:]

    @classmethod
    def label(cls, icon_name: str, locale: str) -> str:
        """Curated label, then the offline table, then the humanized component name."""
        curated = cls.curated(icon_name, locale)
        if curated:
            return curated
        if icon_name in ICON_FALLBACK_LABELS:
            return ICON_FALLBACK_LABELS[icon_name]
        return cls.humanize(icon_name)

    @classmethod
    def generic(cls, term: str, locale: str) -> str:
        """Localized generic 'Button' or 'Link'."""
        labels = GENERIC_LABELS.get(cls.base_locale(locale), GENERIC_LABELS["en"])
        return labels.get(term, GENERIC_LABELS["en"][term])


@dataclass(frozen=True)
class IconClassifier:
    """
    Decides which JSX tags look like icons.

    Icon libraries differ in naming; extend ``suffixes`` or ``svg_tags`` rather
    than changing rule logic.
    """

    suffixes: tuple[str, ...] = ("Icon",)
    svg_tags: tuple[str, ...] = ("svg",)
    svg_parts: frozenset[str] = field(default_factory=lambda: frozenset({"svg", "path", "rect", "circle", "g", "line", "polyline", "polygon", "use"}))
    non_icon_components: frozenset[str] = field(default_factory=lambda: frozenset({"Image", "Link", "Svg"}))
    pascal_case_is_icon: bool = True

    @staticmethod
    def is_pascal_case(tag: str) -> bool:
        return bool(tag) and tag[0].isupper() and "." not in tag

    def has_icon_suffix(self, tag: str) -> bool:
        return any(tag.endswith(suffix) for suffix in self.suffixes)

    def is_icon_tag(self, tag: str) -> bool:
        """Tag ending in an icon suffix, an svg, or (optionally) any PascalCase component."""
        if self.has_icon_suffix(tag) or tag in self.svg_tags:
            return True
        return self.pascal_case_is_icon and self.is_pascal_case(tag) and tag not in self.non_icon_components

    def icon_name(self, element: "JsxElement") -> Optional[str]:
        """First icon-like component nested in ``element``; None for bare svg markup."""
        for child in element.descendant_elements():
            tag = child.tag
            if tag in self.svg_parts:
                continue
            if self.has_icon_suffix(tag):
                return tag
            if self.pascal_case_is_icon and self.is_pascal_case(tag) and tag not in self.non_icon_components:
                return tag
        return None


DEFAULT_ICON_CLASSIFIER = IconClassifier()
