"""
Data models for the markdown → Google Slides translator.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class TokenKind(Enum):
    """Block-level token kinds the request builder cares about."""

    HEADING_OPEN = "heading_open"
    PARAGRAPH_OPEN = "paragraph_open"
    LIST_ITEM_OPEN = "list_item_open"
    INLINE = "inline"
    OTHER = "other"


@dataclass(frozen=True)
class BlockToken:
    """
    One item of the block token stream for a slide fragment.

    ``content`` is only meaningful for ``INLINE`` tokens. ``source_type`` keeps
    the markdown-it token type so dropped blocks can be reported.
    """
    kind: TokenKind
    content: str = ""
    source_type: str = ""

    def is_inline(self) -> bool:
        return self.kind is TokenKind.INLINE


@dataclass
class SlideSpec:
    """Title and body text extracted from one markdown fragment."""
    title: Optional[str] = None
    body_lines: List[str] = field(default_factory=list)

    def display_title(self, index: int) -> str:
        """Title to render, falling back to ``Slide N`` (1-based)."""
        return self.title or f"Slide {index + 1}"

    @property
    def body_text(self) -> str:
        return "\n\n".join(self.body_lines)


@dataclass(frozen=True)
class ShapeGeometry:
    """Position and size of a text box, in points."""
    x: float
    y: float
    width: float
    height: float

    def to_element_properties(self, page_object_id: str) -> Dict:
        return {
            "pageObjectId": page_object_id,
            "size": {
                "width": {"magnitude": self.width, "unit": "PT"},
                "height": {"magnitude": self.height, "unit": "PT"},
            },
            "transform": {
                "scaleX": 1,
                "scaleY": 1,
                "translateX": self.x,
                "translateY": self.y,
                "unit": "PT",
            },
        }


TITLE_GEOMETRY = ShapeGeometry(x=50, y=50, width=600, height=50)
BODY_GEOMETRY = ShapeGeometry(x=50, y=120, width=600, height=350)


# ---------------------------------------------------------------------------
# Mutation operations (one per Slides API request kind)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateSlide:
    object_id: str
    insertion_index: int
    layout: str = "TITLE_AND_BODY"

    kind = "createSlide"

    def to_request(self) -> Dict:
        return {
            "createSlide": {
                "objectId": self.object_id,
                "insertionIndex": self.insertion_index,
                "slideLayoutReference": {"predefinedLayout": self.layout},
            }
        }


@dataclass(frozen=True)
class CreateShape:
    object_id: str
    page_object_id: str
    geometry: ShapeGeometry
    shape_type: str = "TEXT_BOX"

    kind = "createShape"

    def to_request(self) -> Dict:
        return {
            "createShape": {
                "objectId": self.object_id,
                "shapeType": self.shape_type,
                "elementProperties": self.geometry.to_element_properties(self.page_object_id),
            }
        }


@dataclass(frozen=True)
class InsertText:
    object_id: str
    text: str

    kind = "insertText"

    def to_request(self) -> Dict:
        return {"insertText": {"objectId": self.object_id, "text": self.text}}


@dataclass(frozen=True)
class UpdateTextStyle:
    object_id: str
    font_size_pt: float
    bold: Optional[bool] = None

    kind = "updateTextStyle"

    def to_request(self) -> Dict:
        style: Dict = {"fontSize": {"magnitude": self.font_size_pt, "unit": "PT"}}
        fields = ["fontSize"]
        if self.bold is not None:
            style["bold"] = self.bold
            fields.append("bold")
        return {
            "updateTextStyle": {
                "objectId": self.object_id,
                "textRange": {"type": "ALL"},
                "style": style,
                "fields": ",".join(fields),
            }
        }
