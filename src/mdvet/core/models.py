"""Data models for loaded documents, their blocks, and snippet reports"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


METADATA_KEYS = ('section', 'layout', 'title', 'redirect_from')


class ProseBlock(BaseModel):
    """Source text between fenced regions, kept verbatim."""
    model_config = ConfigDict(frozen=True)

    kind: Literal['prose'] = 'prose'
    text: str
    line: int = 1


class CodeBlock(BaseModel):
    """A fenced code region and its language tag."""
    model_config = ConfigDict(frozen=True)

    kind: Literal['code'] = 'code'
    language: str               # first word of the info string; '' when untagged
    source: str                 # fence body, final newline removed
    info: str = ''              # full info string after the opening fence
    fence: str = '```'          # opening fence markup
    raw: str = ''               # exact source slice including fences
    line: int = 1               # file line of the opening fence


Block = Annotated[Union[ProseBlock, CodeBlock], Field(discriminator='kind')]


class Document(BaseModel):
    """A loaded page: path, front matter, and blocks in reading order."""
    model_config = ConfigDict(frozen=True)

    path: str
    metadata: dict[str, Any] = {}
    body: tuple[Block, ...] = ()
    body_line: int = 1          # file line where the body starts

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get('title')

    @property
    def section(self) -> Optional[str]:
        return self.metadata.get('section')

    @property
    def layout(self) -> Optional[str]:
        return self.metadata.get('layout')

    @property
    def redirect_from(self) -> list[str]:
        """Redirect aliases; a single string value is treated as one alias."""
        value = self.metadata.get('redirect_from')
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]

    @property
    def extra_metadata(self) -> dict[str, Any]:
        """Front matter keys outside the known set, unchanged."""
        return {k: v for k, v in self.metadata.items() if k not in METADATA_KEYS}

    @property
    def code_blocks(self) -> list[CodeBlock]:
        return [b for b in self.body if isinstance(b, CodeBlock)]


class SnippetStatus(str, Enum):
    ok = 'ok'
    error = 'error'
    skipped = 'skipped'


class SnippetReport(BaseModel):
    """Validation outcome for one code block."""
    model_config = ConfigDict(frozen=True)

    path: str
    index: int                  # ordinal among the document's code blocks
    language: str
    line: int                   # file line of the opening fence, or of the error when known
    status: SnippetStatus
    message: Optional[str] = None


class LoadFailure(BaseModel):
    """A document that could not be loaded."""
    path: str
    error: str                  # exception class name
    message: str


class RunResult(BaseModel):
    """Outcome of loading and checking a set of files."""
    documents: list[Document] = []
    failures: list[LoadFailure] = []
    reports: list[SnippetReport] = []

    @property
    def errors(self) -> list[SnippetReport]:
        return [r for r in self.reports if r.status == SnippetStatus.error]

    @property
    def error_count(self) -> int:
        return len(self.errors) + len(self.failures)

    @property
    def ok(self) -> bool:
        return self.error_count == 0
