"""Lazy, restartable view over a document's code blocks"""

from typing import Iterable, Iterator, Optional

from mdvet.core.models import CodeBlock, Document


class Snippets:
    """Iterate (index, CodeBlock) pairs of a Document in source order.

    Each iteration walks the document body afresh, so the view can be
    consumed any number of times. index is the ordinal among all code
    blocks and does not shift when a languages filter is applied.
    """

    def __init__(self, doc: Document, languages: Optional[Iterable[str]] = None):
        self.doc = doc
        self.languages = frozenset(t.lower() for t in languages) if languages else None

    def __iter__(self) -> Iterator[tuple[int, CodeBlock]]:
        index = 0
        for block in self.doc.body:
            if not isinstance(block, CodeBlock):
                continue
            if self.languages is None or block.language.lower() in self.languages:
                yield index, block
            index += 1

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def blocks(self) -> list[CodeBlock]:
        return [block for _, block in self]
