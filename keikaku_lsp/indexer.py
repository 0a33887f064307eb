from __future__ import annotations

"""
Document indexer for keikaku sources.

Runs the real reader over the buffer and, when it parses, evaluates the
top-level forms in a scratch interpreter. The result powers the language
server: diagnostics located at error spans, document symbols for top-level
`(def name expr)` forms and hover lookups.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position as LspPosition, Range

from keikaku.errors import EvalError, KeikakuError, ParseError
from keikaku.interpreter import Interpreter
from keikaku.reader.lexer import Token, TokenKind, lex
from keikaku.reader.parser import DefType, Located
from keikaku.reader.position import Position, Span
from keikaku.types.symbol import Symbol

BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ n...) -> sum, 0 with no arguments",
    "-": "(- n) -> negation; (- n m...) -> n minus the sum of m...",
    "*": "(* n...) -> product, 1 with no arguments",
    "/": "(/ n m...) -> n divided by the sum of m..., truncated toward zero",
    "def": "(def name expr) -> binds name to the value of expr",
}


@dataclass
class SymbolDef:
    name: str
    span: Span       # the name itself
    form_span: Span  # the whole (def ...) form


@dataclass
class DocumentIndex:
    tokens: List[tuple[Token, Span]] = field(default_factory=list)
    exprs: List[Located] = field(default_factory=list)
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    parse_error: Optional[ParseError] = None
    eval_error: Optional[EvalError] = None

    @property
    def errors(self) -> List[KeikakuError]:
        return [e for e in (self.parse_error, self.eval_error) if e is not None]


def build_index(text: str, name: str = "<buffer>", max_depth: int | None = None) -> DocumentIndex:
    idx = DocumentIndex(tokens=list(lex(text, name)))

    interp = Interpreter(max_depth=max_depth)
    try:
        idx.exprs = interp.read(text, name)
    except ParseError as e:
        idx.parse_error = e
        return idx

    for expr in idx.exprs:
        match expr.node:
            case [Located(DefType()), Located(Symbol() as sym, sym_span), _]:
                idx.symbols[str(sym)] = SymbolDef(str(sym), sym_span, expr.span)

    try:
        interp.evaluator.eval_all(idx.exprs)
    except EvalError as e:
        idx.eval_error = e
    return idx


def _contains(span: Span, pos: Position) -> bool:
    start, end = span.start, span.end
    return (start.line, start.column) <= (pos.line, pos.column) <= (end.line, end.column)


def word_at(idx: DocumentIndex, line: int, column: int) -> Optional[tuple[str, Span]]:
    """The identifier token under a 0-based line/column, if any."""
    pos = Position(line, column)
    for token, span in idx.tokens:
        if token.kind is TokenKind.IDENTIFIER and _contains(span, pos):
            return token.text, span
    return None


def hover_text(idx: DocumentIndex, line: int, column: int) -> Optional[str]:
    hit = word_at(idx, line, column)
    if hit is None:
        return None
    word, _ = hit
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{word} - defined at {sdef.span.start}"
    return None


# --- LSP conversions ---
def span_to_range(span: Optional[Span]) -> Range:
    if span is None:
        return Range(start=LspPosition(line=0, character=0), end=LspPosition(line=0, character=0))
    # Span ends are inclusive, LSP range ends are exclusive
    return Range(
        start=LspPosition(line=span.start.line, character=span.start.column),
        end=LspPosition(line=span.end.line, character=span.end.column + 1),
    )


def error_to_diagnostic(error: KeikakuError) -> Diagnostic:
    stage = "parse" if isinstance(error, ParseError) else "eval"
    return Diagnostic(
        range=span_to_range(error.span),
        message=error.describe(),
        severity=DiagnosticSeverity.Error,
        source=f"keikaku-ls ({stage})",
    )
