from __future__ import annotations

"""
A minimal pygls-based Language Server for SharpLisp.

Features:
- Text synchronization and document store
- Diagnostics: lexer errors, unclosed and unexpected parentheses
- Hover: builtin signatures and names bound with (def :name ...)
- Completion: builtins and defined names
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from pygls.workspace import TextDocument
from lsprotocol.types import (
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    TextDocumentContentChangeEvent,
    TextDocumentSyncKind,
)

from sharplisp import __version__
from sharplisp.config import get_log_level
from sharplisp_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex

logger = logging.getLogger(__name__)

WORD_BREAKS = " \t()\n\r"


@dataclass
class DocumentState:
    document: TextDocument
    index: DocumentIndex

    @classmethod
    def open(cls, uri: str, text: str, version: Optional[int] = None) -> DocumentState:
        # Incremental sync: clients send ranged edits, applied to this copy
        document = TextDocument(uri, text, version=version, sync_kind=TextDocumentSyncKind.Incremental)
        return cls(document=document, index=build_index(text))

    @property
    def text(self) -> str:
        return self.document.source

    def apply_changes(self, changes: List[TextDocumentContentChangeEvent], version: Optional[int] = None) -> None:
        for change in changes:
            self.document.apply_change(change)
        self.document.version = version
        self.index = build_index(self.document.source)


class SharpLanguageServer(LanguageServer):
    CMD_NAME = "sharplisp-ls"

    def __init__(self):
        super().__init__(
            self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Incremental
        )
        self.documents: Dict[str, DocumentState] = {}


ls = SharpLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    doc = params.text_document
    ls.documents[doc.uri] = DocumentState.open(doc.uri, doc.text or "", doc.version)
    _publish(doc.uri)


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    if state is None:
        # change without open: start from an empty buffer
        state = ls.documents[uri] = DocumentState.open(uri, "")
    state.apply_changes(list(params.content_changes), params.text_document.version)
    _publish(uri)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


def _publish(uri: str) -> None:
    idx = ls.documents[uri].index
    diags = build_diagnostics(idx)
    logger.debug("%s: %d symbols, %d diagnostics", uri, len(idx.symbols), len(diags))
    ls.publish_diagnostics(uri, diags)


# --- Diagnostics ---
def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=Range(
                start=Position(line=p.line, character=p.col),
                end=Position(line=p.line, character=p.col + p.length),
            ),
            message=p.message,
            severity=DiagnosticSeverity.Error,
            source=SharpLanguageServer.CMD_NAME,
        )
        for p in idx.problems
    ]


# --- Hover ---
def hover_text(state: DocumentState, pos: Position) -> Optional[str]:
    word = extract_word_at(state.text, pos)
    if not word:
        return None
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    if word.startswith(":"):
        word = word[1:]
    sdef = state.index.symbols.get(word)
    if sdef is None:
        return None
    return f"{word} - {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state, params.position)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(state: Optional[DocumentState]) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind))
    return items


@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(state))


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        # +1 covers the ':' prefix of the symbol literal
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name) + 1),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    end = min(pos.character, len(line))
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    word = line[start:end]
    # '#' belongs to the lambda opener, not the word
    return word.rstrip("#") or None


def main() -> None:
    logging.basicConfig(level=get_log_level())
    ls.start_io()


if __name__ == "__main__":
    # Run the language server over stdio
    main()
