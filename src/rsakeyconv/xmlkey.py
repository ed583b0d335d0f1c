"""XML `RSAKeyValue` codec.

Serializes key material to the XML element tree used by .NET style tooling, where every field is the base64 of its
unsigned big-endian bytes. Element order is fixed as some consumers parse positionally.

Typical usage example:

    xml = encode_private(km)
    km = decode(xml)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
from xml.etree import ElementTree

from rsakeyconv.errors import FormatInvalid
from rsakeyconv.errors import MaterialIncomplete
from rsakeyconv.material import KeyMaterial

ROOT_TAG = "RSAKeyValue"
PUBLIC_ELEMENTS = (("Modulus", "modulus"), ("Exponent", "public_exponent"))
PRIVATE_ELEMENTS = PUBLIC_ELEMENTS + (
    ("P", "prime_p"),
    ("Q", "prime_q"),
    ("DP", "exponent_dp"),
    ("DQ", "exponent_dq"),
    ("InverseQ", "coefficient_qinv"),
    ("D", "private_exponent"),
)


def _serialize(material: KeyMaterial, elements: tuple[tuple[str, str], ...]) -> str:
    root = ElementTree.Element(ROOT_TAG)
    for tag, field in elements:
        child = ElementTree.SubElement(root, tag)
        child.text = base64.b64encode(getattr(material, field)).decode("ascii")
    ElementTree.indent(root, space="  ")
    return ElementTree.tostring(root, encoding="unicode")


def encode_public(material: KeyMaterial) -> str:
    """Encodes the public fields of the material as XML.

    Private material is accepted, its private fields are left out.

    Args:
        material: The key material.

    Returns:
        `RSAKeyValue` XML holding Modulus and Exponent.
    """
    return _serialize(material, PUBLIC_ELEMENTS)


def encode_private(material: KeyMaterial) -> str:
    """Encodes all eight fields of private material as XML.

    Args:
        material: The private key material.

    Returns:
        `RSAKeyValue` XML with Modulus, Exponent, P, Q, DP, DQ, InverseQ and D, in that order.

    Raises:
        MaterialIncomplete: If the material is public only.
    """
    if not material.is_private:
        raise MaterialIncomplete("Cannot encode a private XML key from public key material.")
    return _serialize(material, PRIVATE_ELEMENTS)


def encode(material: KeyMaterial) -> str:
    """Encodes the material as public or private XML, whichever it holds."""
    return encode_private(material) if material.is_private else encode_public(material)


def _field(root: ElementTree.Element, tag: str) -> bytes | None:
    element = root.find(tag)
    if element is None:
        return None
    text = (element.text or "").strip()
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise FormatInvalid(f"Element {tag} does not hold valid base64.") from exc


def decode(xml: str) -> KeyMaterial:
    """Decodes an `RSAKeyValue` XML value.

    Modulus and Exponent are mandatory. The remaining elements are either all present (private material) or all
    absent (public material). Values are kept as decoded, leading zero bytes included.

    Args:
        xml: The XML text.

    Returns:
        The decoded key material.

    Raises:
        FormatInvalid: If the XML is malformed, the root element is wrong or a value is not base64.
        MaterialIncomplete: If a mandatory element is missing or only some private elements are present.
    """
    try:
        root = ElementTree.fromstring(xml)
    except ElementTree.ParseError as exc:
        raise FormatInvalid(f"Key is not well-formed XML: {exc}") from exc
    if root.tag != ROOT_TAG:
        raise FormatInvalid(f"Expected {ROOT_TAG} root element, got {root.tag}")
    fields = {field: _field(root, tag) for tag, field in PRIVATE_ELEMENTS}
    missing = [tag for tag, field in PUBLIC_ELEMENTS if fields[field] is None]
    if missing:
        raise MaterialIncomplete(f"XML key is missing mandatory elements: {', '.join(missing)}")
    return KeyMaterial(**fields)
