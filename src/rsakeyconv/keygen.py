"""Key pair generation straight into any of the supported textual formats.

Prime generation and the CSPRNG are those of the `cryptography` package (OpenSSL under the hood); this module only
routes the fresh key material through the format encoders.

Typical usage example:

    private_text, public_text = generate_key_pair(KeyFormat.PKCS8, 2048)
    private_xml, public_xml = xml_key(2048)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from cryptography.hazmat.primitives.asymmetric import rsa

from rsakeyconv import convert
from rsakeyconv.convert import KeyFormat
from rsakeyconv.errors import InvalidKeySize
from rsakeyconv.material import KeyMaterial

logger = logging.getLogger(__name__)

DEFAULT_EXPONENT = 65537
SUPPORTED_EXPONENTS = (3, 65537)


def generate_material(size: int, pub: int = DEFAULT_EXPONENT) -> KeyMaterial:
    """Generates private RSA key material.

    Args:
        size: The modulus size in bits. Limits are those of the generation primitive.
        pub: The public exponent. Defaults (and recommended) to use 65537.

    Returns:
        Private key material with all CRT fields.

    Raises:
        ValueError: If `pub` is not a supported exponent.
        InvalidKeySize: If the primitive rejects `size`.
    """
    if pub not in SUPPORTED_EXPONENTS:
        raise ValueError("Public exponent does not meet requirements.")
    try:
        key = rsa.generate_private_key(public_exponent=pub, key_size=size)
    except ValueError as exc:
        raise InvalidKeySize(f"Key size {size} is not supported: {exc}") from exc
    privs = key.private_numbers()
    pubs = privs.public_numbers
    logger.debug("Generated %d-bit RSA key material", size)
    return KeyMaterial.from_integers(pubs.n, pubs.e, privs.d, privs.p, privs.q, privs.dmp1, privs.dmq1, privs.iqmp)


def generate_key_pair(fmt: KeyFormat, size: int, wrapped: bool = True, pub: int = DEFAULT_EXPONENT) -> tuple[str, str]:
    """Generates an RSA key pair in the requested format.

    Args:
        fmt: Output format. XML output never carries a PEM envelope.
        size: The modulus size in bits.
        wrapped: Whether PKCS1/PKCS8 output keeps its PEM envelope.
            If False, both texts are the bare single-line base64 payload.
        pub: The public exponent.

    Returns:
        A (private key text, public key text) tuple.

    Raises:
        InvalidKeySize: If the primitive rejects `size`.
    """
    fmt = KeyFormat(fmt)
    material = generate_material(size, pub)
    private_text = convert.encode_private(material, fmt)
    public_text = convert.encode_public(material.public(), fmt)
    if not wrapped:
        private_text = convert.strip_envelope(private_text, fmt)
        public_text = convert.strip_envelope(public_text, fmt, private=False)
    return private_text, public_text


def xml_key(size: int) -> tuple[str, str]:
    """Generates a key pair as XML `RSAKeyValue` values."""
    return generate_key_pair(KeyFormat.XML, size)


def pkcs1_key(size: int, wrapped: bool = True) -> tuple[str, str]:
    """Generates a PKCS1 private key and its public key."""
    return generate_key_pair(KeyFormat.PKCS1, size, wrapped)


def pkcs8_key(size: int, wrapped: bool = True) -> tuple[str, str]:
    """Generates a PKCS8 private key and its public key."""
    return generate_key_pair(KeyFormat.PKCS8, size, wrapped)
