"""
Layout for the compact record notation returned by the translation backend.

The backend answers with something like

    [{k1 v1, k2 v2} {k1 v1, k2 v2}]

and `reformat` turns it into

    [{k1 v1
      k2 v2}

     {k1 v1
      k2 v2}]

Only whitespace and line breaks change. The notation's grammar is not known
here, so this is surface layout: `, ` is always taken to separate fields,
even inside what might be a quoted value.

Two passes: `tokenize` scans the text once for the structural markers and
`render` walks the tokens once. Indentation is flat (every field line gets
two spaces), nesting depth is not tracked.
"""
from dataclasses import dataclass
from enum import Enum
import re

INDENT = "  "
FIELD_BREAK = "\n" + INDENT
RECORD_GAP = "}\n\n {"

class Kind(str, Enum):
    """Marker classes recognised in compact notation."""
    SEQ_OPEN = "seq_open"
    SEQ_CLOSE = "seq_close"
    GAP = "gap"
    BREAK = "break"
    TEXT = "text"

@dataclass(frozen=True)
class Token:
    """One slice of the input text."""
    kind: Kind
    value: str

# Alternatives are tried in order at each position.
# gap: `} {`, or an already laid out gap (a blank line between `}` and `{`)
# break: `, ` or a line break, plus any whitespace/separators that follow
# text: a run that cannot start a marker, else a single character
_TOKEN_RE = re.compile(r"""
      (?P<seq_open>\[\{)
    | (?P<seq_close>\}\])
    | (?P<gap>\}(?:[ ]|[^\S\n]*\n[^\S\n]*\n\s*)\{)
    | (?P<break>(?:,[ ]|\n)(?:,[ ]|\s)*)
    | (?P<text>[^\[\}\n,]+|.)
""", re.VERBOSE | re.DOTALL)


def tokenize(text: str) -> list[Token]:
    """Split text into structural tokens. Adjacent text is merged."""
    tokens: list[Token] = []
    for match in _TOKEN_RE.finditer(text):
        kind = Kind(match.lastgroup)
        value = match.group()
        if kind is Kind.TEXT and tokens and tokens[-1].kind is Kind.TEXT:
            tokens[-1] = Token(Kind.TEXT, tokens[-1].value + value)
        else:
            tokens.append(Token(kind, value))
    return tokens


def _trim_trailing_space(parts: list[str]) -> None:
    """Drop whitespace at the end of the output built so far, in place."""
    while parts:
        stripped = parts[-1].rstrip()
        if stripped:
            parts[-1] = stripped
            return
        parts.pop()


def render(tokens: list[Token]) -> str:
    """Lay out a token list as indented, blank-line separated text."""
    parts: list[str] = []
    after_open = False  # directly after `[{`: no break, no leading space
    for tok in tokens:
        if tok.kind is Kind.SEQ_OPEN:
            parts.append("[{")
            after_open = True
        elif tok.kind is Kind.SEQ_CLOSE:
            _trim_trailing_space(parts)
            parts.append("}]")
            after_open = False
        elif tok.kind is Kind.GAP:
            parts.append(RECORD_GAP)
            after_open = False
        elif tok.kind is Kind.BREAK:
            if not after_open:
                parts.append(FIELD_BREAK)
        else:
            value = tok.value.lstrip() if after_open else tok.value
            if value:
                parts.append(value)
                after_open = False
    return "".join(parts)


def reformat(text: str) -> str:
    """
    Pretty-print compact record notation.

    Total and pure: any string in, some string out. Running it on its own
    output gives the same text back.
    """
    if not text:
        return ""
    return render(tokenize(text))


def count_records(formatted: str) -> int:
    """Number of top-level records in reformatted text (0 if not a sequence)."""
    if "[{" not in formatted:
        return 0
    return formatted.count(RECORD_GAP) + 1
