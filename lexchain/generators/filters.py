"""
Identifier sanitization and Jinja2 escaping filters for Solidity output.

Every value that originates from a document passes through one of these
before it reaches generated source: string literals get Solidity escape
sequences, NatSpec comment text is flattened so it cannot close the comment
or start a new tag.
"""

import re
from typing import Any

from jinja2 import Environment

MAX_IDENTIFIER_LENGTH = 100
DEFAULT_IDENTIFIER = "Contract"

# Keywords and elementary type names that cannot name a contract
_RESERVED = {
    "abstract", "address", "after", "alias", "anonymous", "apply", "assembly",
    "auto", "bool", "break", "byte", "bytes", "calldata", "case", "catch",
    "constant", "constructor", "continue", "contract", "copyof", "days",
    "default", "define", "delete", "do", "else", "emit", "enum", "ether",
    "event", "external", "fallback", "false", "final", "fixed", "for",
    "function", "gwei", "hours", "if", "immutable", "implements", "import",
    "in", "indexed", "inline", "int", "interface", "internal", "is", "let",
    "library", "macro", "mapping", "match", "memory", "minutes", "modifier",
    "mutable", "new", "null", "of", "override", "partial", "payable", "pragma",
    "private", "promise", "public", "pure", "receive", "reference",
    "relocatable", "return", "returns", "sealed", "seconds", "sizeof",
    "static", "storage", "string", "struct", "super", "supports", "switch",
    "this", "true", "try", "type", "typedef", "typeof", "ufixed", "uint",
    "unchecked", "unicode", "using", "var", "view", "virtual", "weeks", "wei",
    "while", "years",
}

# Sized elementary types: uint8..uint256, int8.., bytes1..bytes32, fixed128x18
_SIZED_TYPE = re.compile(r"^(?:u?int[0-9]+|bytes[0-9]+|u?fixed[0-9]+x[0-9]+)$")

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_UNDERSCORE_RUN = re.compile(r"_+")
_WHITESPACE = re.compile(r"\s+")


def sanitize_identifier(name: Any) -> str:
    """
    Turn a free-text contract type into a valid Solidity identifier.

    "3 Party NDA!!" -> "_3_Party_NDA". The result matches
    ``^[A-Za-z_][A-Za-z0-9_]{0,99}$`` and never contains "__".
    """
    ident = _NON_ALNUM.sub("_", str(name or ""))
    if ident[:1].isdigit():
        ident = "_" + ident
    ident = _UNDERSCORE_RUN.sub("_", ident).rstrip("_")
    ident = ident[:MAX_IDENTIFIER_LENGTH].rstrip("_")

    if not ident:
        return DEFAULT_IDENTIFIER
    if ident in _RESERVED or _SIZED_TYPE.match(ident):
        ident = ident[:MAX_IDENTIFIER_LENGTH - len(DEFAULT_IDENTIFIER)] + DEFAULT_IDENTIFIER
    return ident


def escape_solidity_string(value: Any) -> str:
    """Escape text for the inside of a double-quoted Solidity string literal."""
    out = []
    for ch in str(value):
        code = ord(ch)
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "'":
            out.append("\\'")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\x{code:02x}")
        elif code > 0x7E:
            if code <= 0xFFFF:
                out.append(f"\\u{code:04x}")
            else:
                out.extend(f"\\x{b:02x}" for b in ch.encode("utf-8"))
        else:
            out.append(ch)
    return "".join(out)


def escape_natspec(value: Any) -> str:
    """Flatten text for a single line inside a /** ... */ comment."""
    text = _WHITESPACE.sub(" ", str(value)).strip()
    text = text.replace("*/", "* /").replace("/*", "/ *")
    return text.replace("@", "(at)")


def register_filters(env: Environment) -> None:
    """Register the Solidity filters on a Jinja2 Environment."""
    env.filters["sol_string"] = escape_solidity_string
    env.filters["natspec"] = escape_natspec
    env.filters["identifier"] = sanitize_identifier
