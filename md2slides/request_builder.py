"""Translate markdown slide fragments into Google Slides batchUpdate requests.

Design notes
------------
1.  One fragment becomes one slide with exactly seven requests, always in the
    order produced by :func:`slide_ops`: createSlide, then create/insert/style
    for the title box, then the same three for the body box.
2.  The markdown is scanned once. Headings supply the title, paragraphs and
    list items supply body lines. Everything else (code, tables, images, …)
    is dropped and only reported at DEBUG level.
3.  Object IDs come from an :class:`~md2slides.ids.IdentifierGenerator` that
    is shared by every fragment of a batch.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .ids import IdentifierGenerator
from .markdown_parser import MarkdownParser
from .models import (
    BODY_GEOMETRY,
    TITLE_GEOMETRY,
    BlockToken,
    CreateShape,
    CreateSlide,
    InsertText,
    SlideSpec,
    TokenKind,
    UpdateTextStyle,
)
from .segmenter import DEFAULT_DELIMITER, segment

logger = logging.getLogger(__name__)

MutationOp = Union[CreateSlide, CreateShape, InsertText, UpdateTextStyle]

BULLET = "• "
TITLE_FONT_SIZE_PT = 24
BODY_FONT_SIZE_PT = 14
SLIDE_LAYOUT = "TITLE_AND_BODY"

_TEXT_OPENERS = (TokenKind.HEADING_OPEN, TokenKind.PARAGRAPH_OPEN, TokenKind.LIST_ITEM_OPEN)
# Structural tokens that carry no text of their own
_SILENT_TYPES = {"bullet_list_open", "ordered_list_open"}


def scan_tokens(tokens: Iterable[BlockToken]) -> SlideSpec:
    """Collect title and body lines from a block token stream.

    An opener (heading, paragraph, list item) consumes the token right after
    it when that token is inline content. Otherwise the lookahead token is
    processed on its own in the next step.
    """
    spec = SlideSpec()
    stream = iter(tokens)
    token = next(stream, None)
    while token is not None:
        following = next(stream, None)
        if token.kind in _TEXT_OPENERS and following is not None and following.is_inline():
            if token.kind is TokenKind.HEADING_OPEN:
                spec.title = following.content
            elif token.kind is TokenKind.LIST_ITEM_OPEN:
                spec.body_lines.append(BULLET + following.content)
            else:
                spec.body_lines.append(following.content)
            token = next(stream, None)
            continue

        _report_dropped(token)
        token = following
    return spec


def _report_dropped(token: BlockToken) -> None:
    if token.kind is TokenKind.INLINE:
        if token.content:
            logger.debug("Dropping inline text outside a paragraph: %r", token.content[:40])
        return
    if token.kind is TokenKind.OTHER:
        if token.source_type.endswith("_close") or token.source_type in _SILENT_TYPES:
            return
        logger.debug("Skipping unsupported markdown block: %s", token.source_type)


def slide_ops(spec: SlideSpec, index: int, slide_id: str, title_id: str, body_id: str) -> List[MutationOp]:
    """The fixed seven-request group for one slide."""
    return [
        CreateSlide(object_id=slide_id, insertion_index=index, layout=SLIDE_LAYOUT),
        CreateShape(object_id=title_id, page_object_id=slide_id, geometry=TITLE_GEOMETRY),
        InsertText(object_id=title_id, text=spec.display_title(index)),
        UpdateTextStyle(object_id=title_id, font_size_pt=TITLE_FONT_SIZE_PT, bold=True),
        CreateShape(object_id=body_id, page_object_id=slide_id, geometry=BODY_GEOMETRY),
        InsertText(object_id=body_id, text=spec.body_text),
        UpdateTextStyle(object_id=body_id, font_size_pt=BODY_FONT_SIZE_PT),
    ]


class SlideRequestBuilder:
    """Build Slides API mutation ops from markdown."""

    def __init__(self, parser: Optional[MarkdownParser] = None) -> None:
        self.parser = parser or MarkdownParser()

    def build(self, fragment: str, index: int, id_gen: IdentifierGenerator) -> Tuple[SlideSpec, List[MutationOp]]:
        """Turn one slide fragment into its :class:`SlideSpec` and request group.

        Parameters
        ----------
        fragment
            Markdown for a single slide (already split and trimmed).
        index
            Zero-based slide position; used as the insertion index and for
            the ``Slide N`` fallback title.
        id_gen
            Identifier source shared by the whole batch.
        """
        spec = scan_tokens(self.parser.tokenize(fragment))
        slide_id = id_gen.next_id("slide")
        title_id = id_gen.next_id("title")
        body_id = id_gen.next_id("body")
        return spec, slide_ops(spec, index, slide_id, title_id, body_id)

    def assemble_specs(
        self,
        document: str,
        delimiter: str = DEFAULT_DELIMITER,
        id_gen: Optional[IdentifierGenerator] = None,
    ) -> Tuple[List[SlideSpec], List[MutationOp]]:
        """Segment *document* and build every fragment into one flat batch."""
        id_gen = id_gen or IdentifierGenerator()
        specs: List[SlideSpec] = []
        ops: List[MutationOp] = []
        for index, fragment in enumerate(segment(document, delimiter)):
            spec, slide_requests = self.build(fragment, index, id_gen)
            specs.append(spec)
            ops.extend(slide_requests)
        logger.debug("Assembled %d slides into %d requests", len(specs), len(ops))
        return specs, ops

    def assemble(
        self,
        document: str,
        delimiter: str = DEFAULT_DELIMITER,
        id_gen: Optional[IdentifierGenerator] = None,
    ) -> List[MutationOp]:
        return self.assemble_specs(document, delimiter, id_gen)[1]


def batch_requests(ops: Iterable[MutationOp]) -> List[Dict]:
    """Serialise ops into the ``requests`` list of a batchUpdate body.

    The Slides API rejects inserting an empty string and styling a shape that
    has no text, so both are left out for shapes whose text is empty. The
    shape itself is still created.
    """
    ops = list(ops)
    empty_shapes = {op.object_id for op in ops if isinstance(op, InsertText) and not op.text}
    requests = []
    for op in ops:
        if isinstance(op, (InsertText, UpdateTextStyle)) and op.object_id in empty_shapes:
            continue
        requests.append(op.to_request())
    return requests


_default_builder = SlideRequestBuilder()


def build(fragment: str, index: int, id_gen: IdentifierGenerator) -> Tuple[SlideSpec, List[MutationOp]]:
    return _default_builder.build(fragment, index, id_gen)


def assemble(
    document: str,
    delimiter: str = DEFAULT_DELIMITER,
    id_gen: Optional[IdentifierGenerator] = None,
) -> List[MutationOp]:
    return _default_builder.assemble(document, delimiter, id_gen)
