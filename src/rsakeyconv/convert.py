"""Conversions between the supported RSA key formats.

Every conversion decodes the source text into `KeyMaterial` and re-encodes it with the target format's encoder, so
no field is ever invented or dropped on the way. Besides the directed helpers for each pair of formats, the module
exposes format-keyed dispatchers used by the key generator, the operation facade and the CLI.

Typical usage example:

    xml = private_key_pkcs1_to_xml(pem_text)
    pkcs8 = convert_key(xml, KeyFormat.XML, KeyFormat.PKCS8)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import logging

from rsakeyconv import container
from rsakeyconv import pem
from rsakeyconv import xmlkey
from rsakeyconv.material import KeyMaterial

logger = logging.getLogger(__name__)


class KeyFormat(enum.Enum):
    """Textual key formats. PKCS1 and PKCS8 private keys both pair with a SubjectPublicKeyInfo public key."""
    XML = "XML"
    PKCS1 = "PKCS1"
    PKCS8 = "PKCS8"


PRIVATE_ENVELOPES = {
    KeyFormat.PKCS1: pem.EnvelopeKind.PKCS1_PRIVATE,
    KeyFormat.PKCS8: pem.EnvelopeKind.PKCS8_PRIVATE,
}

_PRIVATE_DECODERS = {
    KeyFormat.XML: xmlkey.decode,
    KeyFormat.PKCS1: container.decode_pkcs1_private,
    KeyFormat.PKCS8: container.decode_pkcs8_private,
}

_PRIVATE_ENCODERS = {
    KeyFormat.XML: xmlkey.encode_private,
    KeyFormat.PKCS1: container.encode_pkcs1_private,
    KeyFormat.PKCS8: container.encode_pkcs8_private,
}


def decode_private(text: str, fmt: KeyFormat) -> KeyMaterial:
    """Decodes a private key in the given format.

    XML input holding only public fields is returned as public material; encoding it into a private container
    later raises `MaterialIncomplete`.
    """
    return _PRIVATE_DECODERS[KeyFormat(fmt)](text)


def decode_public(text: str, fmt: KeyFormat) -> KeyMaterial:
    """Decodes a public key in the given format.

    For XML the public half is taken, so a private XML key is accepted too.
    """
    if KeyFormat(fmt) is KeyFormat.XML:
        return xmlkey.decode(text).public()
    return container.decode_public(text)


def encode_private(material: KeyMaterial, fmt: KeyFormat) -> str:
    """Encodes private material in the given format.

    Raises:
        MaterialIncomplete: If the material is public only.
    """
    return _PRIVATE_ENCODERS[KeyFormat(fmt)](material)


def encode_public(material: KeyMaterial, fmt: KeyFormat) -> str:
    """Encodes the public half of the material in the given format."""
    if KeyFormat(fmt) is KeyFormat.XML:
        return xmlkey.encode_public(material)
    return container.encode_public(material)


def strip_envelope(text: str, fmt: KeyFormat, private: bool = True) -> str:
    """Removes the PEM envelope matching `fmt`, leaving XML untouched."""
    fmt = KeyFormat(fmt)
    if fmt is KeyFormat.XML:
        return text
    kind = PRIVATE_ENVELOPES[fmt] if private else pem.EnvelopeKind.PUBLIC
    return pem.unwrap(text, kind)


def convert_key(text: str, source: KeyFormat, target: KeyFormat, private: bool = True, wrapped: bool = True) -> str:
    """Converts a key from one format to another.

    Args:
        text: The key text, PEM or unwrapped for PKCS1/PKCS8.
        source: The format of `text`.
        target: The desired format.
        private: Whether `text` is a private key. Public keys keep their public fields only.
        wrapped: Whether PEM output keeps its envelope. Ignored for XML.

    Returns:
        The converted key text.

    Raises:
        RSAKeyError: Any of its subclasses, when decoding or encoding fails.
    """
    source, target = KeyFormat(source), KeyFormat(target)
    if private:
        material = decode_private(text, source)
        result = encode_private(material, target)
    else:
        material = decode_public(text, source)
        result = encode_public(material, target)
    logger.debug("Converted %s %d-bit %s key to %s", "private" if private else "public", material.key_size,
                 source.value, target.value)
    if not wrapped:
        result = strip_envelope(result, target, private)
    return result


def public_key_pem_to_xml(public_key: str) -> str:
    """Converts a PEM (or unwrapped) SubjectPublicKeyInfo public key to XML."""
    return convert_key(public_key, KeyFormat.PKCS8, KeyFormat.XML, private=False)


def public_key_xml_to_pem(public_key: str) -> str:
    """Converts an XML public key to a PEM SubjectPublicKeyInfo public key."""
    return convert_key(public_key, KeyFormat.XML, KeyFormat.PKCS8, private=False)


def private_key_pkcs1_to_xml(private_key: str) -> str:
    """Converts a PKCS1 private key to XML."""
    return convert_key(private_key, KeyFormat.PKCS1, KeyFormat.XML)


def private_key_xml_to_pkcs1(private_key: str) -> str:
    """Converts an XML private key to PEM PKCS1."""
    return convert_key(private_key, KeyFormat.XML, KeyFormat.PKCS1)


def private_key_pkcs8_to_xml(private_key: str) -> str:
    """Converts a PKCS8 private key to XML."""
    return convert_key(private_key, KeyFormat.PKCS8, KeyFormat.XML)


def private_key_xml_to_pkcs8(private_key: str) -> str:
    """Converts an XML private key to PEM PKCS8."""
    return convert_key(private_key, KeyFormat.XML, KeyFormat.PKCS8)


def private_key_pkcs1_to_pkcs8(private_key: str) -> str:
    """Converts a PKCS1 private key to PEM PKCS8."""
    return convert_key(private_key, KeyFormat.PKCS1, KeyFormat.PKCS8)


def private_key_pkcs8_to_pkcs1(private_key: str) -> str:
    """Converts a PKCS8 private key to PEM PKCS1."""
    return convert_key(private_key, KeyFormat.PKCS8, KeyFormat.PKCS1)
