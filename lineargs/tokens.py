"""
lineargs tokenizer: split a command-line-style string into word tokens.

Rules
- tokens are separated by runs of whitespace.
- a run wrapped in matching single or double quotes loses its quotes; inside it,
  an escaped quote of the same kind (\\" in "...", \\' in '...') becomes a literal
  quote. no other escape processing happens.
- quoted and unquoted runs glue together when no whitespace separates them:
      --name="John Doe"  →  --name=John Doe
- an unmatched quote is kept as a literal character (malformed input degrades,
  it never fails).
- empty tokens are never produced ("" alone yields nothing).
"""
import re

# One run per match: double-quoted, single-quoted, bare, or a stray quote char.
_RUN = re.compile(r'''"(?P<double>(?:\\"|[^"])*)"|'(?P<single>(?:\\'|[^'])*)'|(?P<bare>[^\s"']+)|(?P<stray>["'])''')
_BLANK = re.compile(r"\s+")


def tokenize(string, /):
    """
    split a raw argument string into tokens (pure function, never raises).

    examples
    - tokenize('-n Bob --age 40')          → ['-n', 'Bob', '--age', '40']
    - tokenize('--name="John Doe" -v')     → ['--name=John Doe', '-v']
    - tokenize("say 'it\\'s' fine")        → ['say', "it's", 'fine']
    """
    if not isinstance(string, str):
        raise TypeError("tokenize() argument must be a string")

    tokens = []
    buffer = []
    index = 0
    while index < len(string):
        if blank := _BLANK.match(string, index):
            if buffer:
                tokens.append("".join(buffer))
                buffer.clear()
            index = blank.end()
            continue
        match = _RUN.match(string, index)
        if match["double"] is not None:
            buffer.append(match["double"].replace('\\"', '"'))
        elif match["single"] is not None:
            buffer.append(match["single"].replace("\\'", "'"))
        else:
            buffer.append(match["bare"] or match["stray"])
        index = match.end()
    if buffer:
        tokens.append("".join(buffer))

    return [token for token in tokens if token]


def unquote(value, /):
    """
    strip one level of matching quotes from a value that is still quoted.

    used by the option resolver on the right-hand side of '--name=value'; the
    same-kind escaped quotes are unescaped only when quotes were stripped.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        quote = value[0]
        return value[1:-1].replace("\\" + quote, quote)
    return value


def flagged(token, /):
    """
    whether a token looks like a flag ('-x', '--name', '-abc').

    the lone '-' is an ordinary value (conventionally “read from stdin”).
    """
    return token.startswith("-") and token != "-"


__all__ = (
    "tokenize",
    "unquote",
    "flagged",
)
