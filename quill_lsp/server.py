from __future__ import annotations

"""
A minimal pygls-based Language Server for Quill.

Features:
- Text synchronization and document store
- Diagnostics: unread program text, redefinitions, undefined declarations,
  repeated parameter names
- Hover: declared signature and parameter list of a function
- Completion: defined functions
- Document Symbols: one per definition

Note: We never evaluate the buffer. We build a static index per document.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from quill import __version__
from quill_lsp.indexer import ERROR, INFORMATION, WARNING, DocumentIndex, Problem, build_index

SEVERITIES = {
    ERROR: DiagnosticSeverity.Error,
    WARNING: DiagnosticSeverity.Warning,
    INFORMATION: DiagnosticSeverity.Information,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class QuillLanguageServer(LanguageServer):
    CMD_NAME = "quill-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}

    def update(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self.publish_diagnostics(uri, to_diagnostics(state.index.problems))
        return state


ls = QuillLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: QuillLanguageServer, params: DidOpenTextDocumentParams):
    ls.update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: QuillLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    document = ls.workspace.get_text_document(uri)
    ls.update(uri, document.source)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: QuillLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def to_diagnostics(problems: List[Problem]) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=_mk_range(p.line, p.col, p.length),
            message=p.message,
            severity=SEVERITIES[p.severity],
            source=QuillLanguageServer.CMD_NAME,
        )
        for p in problems
    ]


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: QuillLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = extract_word_at(state.text, params.position)
    if not word:
        return None
    contents = state.index.describe(word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: QuillLanguageServer, params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    if state:
        for name, sdef in state.index.symbols.items():
            decl = state.index.declarations.get(name)
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.Function,
                    detail=sdef.label,
                    documentation=str(decl) if decl is not None else None,
                )
            )
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: QuillLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.label,
                kind=SymbolKind.Function,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def extract_word_at(text: str, pos: Position) -> Optional[str]:
    """The run of ASCII letters (a Quill name) under the cursor, if any."""
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]

    def is_name_char(ch: str) -> bool:
        return ch.isascii() and ch.isalpha()

    start = min(pos.character, len(line))
    while start > 0 and is_name_char(line[start - 1]):
        start -= 1
    end = pos.character
    while end < len(line) and is_name_char(line[end]):
        end += 1
    return line[start:end] or None


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
