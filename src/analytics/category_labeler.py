"""Display names, colors and icons for report categories."""

import zlib
from typing import Optional, Union

from src.config import settings
from src.models.report import CategoryKind, CategoryLabel

# Icons per dimension, with the fallback used for unmapped keys
CATEGORY_ICONS: dict[CategoryKind, dict[str, str]] = {
    CategoryKind.PROPERTY: {
        "limuru": "fas fa-mountain",
        "kanamai": "fas fa-umbrella-beach",
        "kisumu": "fas fa-hotel",
    },
    CategoryKind.SOURCE: {
        "website": "fas fa-globe",
        "phone": "fas fa-phone",
        "email": "fas fa-envelope",
        "walkin": "fas fa-walking",
        "walk-in": "fas fa-walking",
        "agent": "fas fa-user-tie",
        "partner": "fas fa-handshake",
    },
    CategoryKind.ROOM_CATEGORY: {},
}

DEFAULT_ICONS: dict[CategoryKind, str] = {
    CategoryKind.PROPERTY: "fas fa-hotel",
    CategoryKind.SOURCE: "fas fa-question-circle",
    CategoryKind.ROOM_CATEGORY: "fas fa-bed",
}


class CategoryLabeler:
    """Deterministic labeling of category keys.

    Explicitly configured names and colors win. Unmapped keys get a
    title-cased name and a palette color picked by a CRC32 hash of the key,
    so a key keeps its color across reports and processes.
    """

    def __init__(
        self,
        names: Optional[dict[str, str]] = None,
        colors: Optional[dict[str, str]] = None,
        palette: Optional[list[str]] = None,
    ):
        self.names = settings.labels.property_names if names is None else names
        self.colors = settings.labels.colors if colors is None else colors
        self.palette = palette or settings.labels.palette

    @staticmethod
    def title_case(key: str) -> str:
        """Readable name for a raw key: "walk-in" -> "Walk In"."""
        return key.replace("_", " ").replace("-", " ").title()

    def display_name(self, key: str) -> str:
        return self.names.get(key) or self.title_case(key)

    def color(self, key: str) -> str:
        explicit = self.colors.get(key)
        if explicit:
            return explicit
        index = zlib.crc32(key.encode("utf-8")) % len(self.palette)
        return self.palette[index]

    def icon(self, key: str, kind: CategoryKind) -> str:
        return CATEGORY_ICONS[kind].get(key, DEFAULT_ICONS[kind])

    def label(self, key: str, kind: Union[CategoryKind, str]) -> CategoryLabel:
        kind = CategoryKind(kind)
        return CategoryLabel(
            key=key,
            kind=kind,
            name=self.display_name(key),
            color=self.color(key),
            icon=self.icon(key, kind),
        )
