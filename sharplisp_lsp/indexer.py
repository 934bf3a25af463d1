from __future__ import annotations

"""
Lightweight indexer for SharpLisp files without evaluating code.

We run the real lexer and scan the token stream for:
- definitions: (def :name ...) outside any lambda body, as a function when the
  value is a #(...) form
- problems: unrecognised characters, unclosed and unexpected parentheses

The scan is tolerant: a lexer error stops tokenizing but the tokens seen so far
are still indexed, so partial buffers keep their symbols.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple

from sharplisp.errors import SharpLexError
from sharplisp.reader.lexer import tokenize_with_positions, LAMBDA_OPEN, LIST_OPEN, CLOSE, OPENERS


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class Problem:
    message: str
    line: int
    col: int
    length: int = 1


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[Problem] = field(default_factory=list)


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _collect_tokens(text: str, idx: DocumentIndex) -> List[Tuple[str, int]]:
    tokens: List[Tuple[str, int]] = []
    try:
        for tok in tokenize_with_positions(text):
            tokens.append(tok)
    except SharpLexError as ex:
        line, col = _position_from_offset(text, ex.position)
        idx.problems.append(Problem(f"Unrecognised character {ex.char!r}", line, col))
    return tokens


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = _collect_tokens(text, idx)

    open_stack: List[Tuple[str, int]] = []
    for i, (tok, start) in enumerate(tokens):
        if tok in OPENERS:
            # defs inside a lambda body bind in that call's scope, not the document's
            in_lambda = any(t == LAMBDA_OPEN for t, _ in open_stack)
            open_stack.append((tok, start))
            # (def :name value)
            if tok == LIST_OPEN and not in_lambda and i + 2 < len(tokens) and tokens[i + 1][0] == "def":
                name_tok, name_start = tokens[i + 2]
                if name_tok.startswith(":") and len(name_tok) > 1:
                    name = name_tok[1:]
                    is_fn = i + 3 < len(tokens) and tokens[i + 3][0] == LAMBDA_OPEN
                    line, col = _position_from_offset(text, name_start)
                    idx.symbols[name] = SymbolDef(
                        name=name, kind="function" if is_fn else "var", line=line, col=col
                    )
        elif tok == CLOSE:
            if open_stack:
                open_stack.pop()
            else:
                line, col = _position_from_offset(text, start)
                idx.problems.append(Problem("Unexpected ')' without a matching opener", line, col))

    for tok, start in open_stack:
        line, col = _position_from_offset(text, start)
        idx.problems.append(Problem("Unclosed parenthesis", line, col, len(tok)))

    return idx


# Builtin signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "add": "(add a b)",
    "sub": "(sub a b)",
    "def": "(def :name value)",
    "do": "(do &rest forms)",
    "print": "(print x)",
    "list": "(list &rest xs)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "eq": "(eq a b)",
    "id": "(id x)",
    "when": "(when cond #(branch))",
    "if": "(if cond #(then) #(else))",
}
