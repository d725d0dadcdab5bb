"""Bloc de contenu — unité normalisée d'une page Notion (titre, paragraphe, image…)."""
from typing import List, Literal, Optional, get_args
from pydantic import BaseModel, ConfigDict, model_validator


BlockKind = Literal[
    "heading_1",
    "heading_2",
    "heading_3",
    "paragraph",
    "bulleted_list_item",
    "numbered_list_item",
    "image",
    "quote",
    "callout",
    "divider",
    "code",
    "unknown",
]

BLOCK_KINDS: tuple = get_args(BlockKind)
HEADING_KINDS = ("heading_1", "heading_2", "heading_3")


class RichSpan(BaseModel):
    """Fragment de texte annoté. L'ordre des fragments est l'ordre d'affichage."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    href: Optional[str] = None


class ContentBlock(BaseModel):
    """
    Bloc immuable, construit une seule fois depuis la source distante.

    `rich_spans` vide → on retombe sur `plain_text`.
    `media_url` n'est autorisé que pour kind == "image".
    """
    model_config = ConfigDict(frozen=True)

    kind: BlockKind = "unknown"
    raw_type: str = ""
    plain_text: str = ""
    rich_spans: List[RichSpan] = []
    media_url: Optional[str] = None
    caption: Optional[str] = None
    language: Optional[str] = None

    @model_validator(mode="after")
    def _media_only_on_images(self):
        if self.media_url is not None and self.kind != "image":
            raise ValueError(f"media_url interdit sur un bloc {self.kind!r}")
        return self

    @property
    def text(self) -> str:
        if self.rich_spans:
            return "".join(s.text for s in self.rich_spans)
        return self.plain_text

    @property
    def is_heading(self) -> bool:
        return self.kind in HEADING_KINDS
