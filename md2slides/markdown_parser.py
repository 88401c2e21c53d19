"""
Markdown tokenizer producing the block token stream used by the request builder.
"""
import logging
from typing import Iterator, List

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .models import BlockToken, TokenKind

logger = logging.getLogger(__name__)

_KIND_BY_TYPE = {
    "heading_open": TokenKind.HEADING_OPEN,
    "paragraph_open": TokenKind.PARAGRAPH_OPEN,
    "list_item_open": TokenKind.LIST_ITEM_OPEN,
    "inline": TokenKind.INLINE,
}


class MarkdownParser:
    """
    Thin wrapper around markdown-it-py that flattens its block tokens into
    :class:`BlockToken` items.
    """

    def __init__(self):
        # Raw HTML is kept as literal text, like markdown-it's default preset.
        self.markdown_processor = MarkdownIt('commonmark', {'html': False})
        self.markdown_processor.enable(['table', 'strikethrough'])

    def parse(self, markdown_text: str) -> List[Token]:
        """
        Parse markdown text into raw markdown-it block tokens.

        Args:
            markdown_text: Markdown content of a single slide

        Returns:
            Flat list of markdown-it tokens
        """
        return self.markdown_processor.parse(markdown_text)

    def tokenize(self, markdown_text: str) -> List[BlockToken]:
        """
        Parse markdown text into the simplified block token stream.

        markdown-it wraps list item text in a paragraph, i.e.
        ``list_item_open, paragraph_open, inline``. The paragraph directly
        after a list item is folded into it so the item text follows its
        ``LIST_ITEM_OPEN`` token.
        """
        return list(self._iter_block_tokens(self.parse(markdown_text)))

    def _iter_block_tokens(self, tokens: List[Token]) -> Iterator[BlockToken]:
        previous_type = None
        for token in tokens:
            if token.type == "paragraph_open" and previous_type == "list_item_open":
                previous_type = token.type
                continue
            previous_type = token.type

            kind = _KIND_BY_TYPE.get(token.type, TokenKind.OTHER)
            content = token.content if kind is TokenKind.INLINE else ""
            yield BlockToken(kind=kind, content=content, source_type=token.type)
