from __future__ import annotations

"""
A minimal pygls-based Language Server for keikaku.

Features:
- Text synchronization and document store
- Diagnostics: parse errors and the first evaluation error, at their spans
- Hover: primitive signatures and top-level definitions
- Document Symbols: top-level (def name expr) forms

Buffers are evaluated in a scratch interpreter; evaluation has no side
effects beyond its own environment and is depth bounded.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Hover,
    MarkupContent,
    MarkupKind,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
)

from keikaku import __version__
from keikaku_lsp.indexer import build_index, error_to_diagnostic, hover_text, span_to_range, DocumentIndex


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class KeikakuLanguageServer(LanguageServer):
    CMD_NAME = "keikaku-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = KeikakuLanguageServer()


# --- Text sync ---
def _refresh(uri: str, text: str) -> None:
    idx = build_index(text, uri)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, [error_to_diagnostic(e) for e in idx.errors])


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _refresh(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Full-document text from the workspace copy, which pygls keeps in sync
    text = ls.workspace.get_text_document(uri).source
    _refresh(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state.index, params.position.line, params.position.character)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return [
        DocumentSymbol(
            name=name,
            kind=SymbolKind.Variable,
            range=span_to_range(sdef.form_span),
            selection_range=span_to_range(sdef.span),
        )
        for name, sdef in state.index.symbols.items()
    ]


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
