"""PEM envelope handling: adding and stripping BEGIN/END markers and fixed-width line wrapping.

Only the three envelopes carrying RSA keys in this package are known. Payloads are treated as opaque text, any
base64 errors surface in whichever codec decodes them.

Typical usage example:

    pem_text = wrap(payload, EnvelopeKind.PUBLIC)
    payload = unwrap(pem_text, EnvelopeKind.PUBLIC)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import pathlib

from rsakeyconv.errors import EnvelopeMismatch
from rsakeyconv.errors import FormatInvalid

LINE_WIDTH = 64
LINE_SEPARATOR = "\r\n"
BEGIN_MARKER = "-----BEGIN "


class EnvelopeKind(enum.Enum):
    """The supported PEM envelopes, valued by their label."""
    PKCS1_PRIVATE = "RSA PRIVATE KEY"
    PKCS8_PRIVATE = "PRIVATE KEY"
    PUBLIC = "PUBLIC KEY"

    @property
    def label(self) -> str:
        return self.value

    @property
    def header(self) -> str:
        return f"-----BEGIN {self.value}-----"

    @property
    def footer(self) -> str:
        return f"-----END {self.value}-----"


def sniff(text: str) -> EnvelopeKind | None:
    """Detects which envelope, if any, a text starts with.

    Args:
        text: PEM text or raw base64.

    Returns:
        The envelope kind, or None if the text carries no BEGIN marker.

    Raises:
        FormatInvalid: If the text has a BEGIN marker with a label we do not know.
    """
    text = text.lstrip()
    if not text.startswith(BEGIN_MARKER):
        return None
    for kind in EnvelopeKind:
        if text.startswith(kind.header):
            return kind
    headline = text.splitlines()[0]
    raise FormatInvalid(f"PEM Headline {headline} is not a supported RSA key envelope")


def wrap(payload: str, kind: EnvelopeKind) -> str:
    """Wraps a base64 payload in a PEM envelope.

    The payload is split in lines of `LINE_WIDTH` characters, framed by the header and footer of `kind` and joined
    with CRLF. Text already starting with the header of `kind` is returned as-is.

    Args:
        payload: The base64 payload.
        kind: The envelope to apply.

    Returns:
        The PEM text, without a trailing line break.

    Raises:
        EnvelopeMismatch: If the payload already carries a different envelope.
    """
    found = sniff(payload)
    if found is kind:
        return payload
    if found is not None:
        raise EnvelopeMismatch(f"Cannot wrap a {found.label} block as {kind.label}")
    lines = [kind.header]
    lines.extend(payload[i:i + LINE_WIDTH] for i in range(0, len(payload), LINE_WIDTH))
    lines.append(kind.footer)
    return LINE_SEPARATOR.join(lines)


def unwrap(text: str, kind: EnvelopeKind) -> str:
    """Strips a PEM envelope, returning the bare base64 payload.

    Text not starting with the header of `kind` is considered already unwrapped and returned unchanged.

    Args:
        text: The PEM text.
        kind: The envelope to remove.

    Returns:
        The concatenated payload.
    """
    if not text.startswith(kind.header):
        return text
    body = text.replace(kind.header, "").replace(kind.footer, "")
    # CRLF is what we write, but LF-only files are common enough.
    return "".join(body.split())


def read_key_file(file: pathlib.Path) -> str:
    """Reads a key file.

    Args:
        file: The file to read.

    Returns:
        The file contents, surrounding whitespace removed.
    """
    with open(file, "r", encoding="ascii", newline="") as f:
        return f.read().strip()


def write_key_file(file: pathlib.Path, text: str) -> None:
    """Writes a key file.

    Args:
        file: The file to write.
        text: Key text in any supported format.
    """
    with open(file, "w", encoding="ascii", newline="") as f:
        f.write(text)
        f.write(LINE_SEPARATOR if LINE_SEPARATOR in text else "\n")
