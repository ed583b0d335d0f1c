"""PKCS1, PKCS8 and SubjectPublicKeyInfo containers for RSA key material.

The ASN.1 grammar and DER codec are those of pyasn1/pyasn1-modules; this module decides which fields go where and
checks that decoded objects are the RSA keys we asked for. Every decoder accepts both PEM text and the unwrapped
base64 payload.

Typical usage example:

    km = decode_pkcs1_private(pem_text)
    pkcs8_text = encode_pkcs8_private(km)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import univ
from pyasn1_modules import rfc5208
from pyasn1_modules import rfc5280
from pyasn1_modules import rfc8017

from rsakeyconv import pem
from rsakeyconv.errors import EnvelopeMismatch
from rsakeyconv.errors import FormatInvalid
from rsakeyconv.errors import MaterialIncomplete
from rsakeyconv.material import KeyMaterial

# KeyMaterial field name to RSAPrivateKey component name.
PKCS1_COMPONENTS = {
    "modulus": "modulus",
    "public_exponent": "publicExponent",
    "private_exponent": "privateExponent",
    "prime_p": "prime1",
    "prime_q": "prime2",
    "exponent_dp": "exponent1",
    "exponent_dq": "exponent2",
    "coefficient_qinv": "coefficient",
}


def _rsa_algorithm(algo) -> None:
    """Fills an AlgorithmIdentifier with rsaEncryption and NULL parameters."""
    algo["algorithm"] = rfc8017.rsaEncryption
    # Assigning univ.Null to the open type slot does not encode, so hand over the DER.
    algo["parameters"] = univ.Any(encoder.encode(univ.Null("")))


def _decode_der(payload: bytes, spec):
    try:
        decoded, rest = decoder.decode(payload, asn1Spec=spec)
    except error.PyAsn1Error as exc:
        raise FormatInvalid(f"Could not decode {type(spec).__name__}: {exc}") from exc
    if rest:
        raise FormatInvalid(f"Trailing data after {type(spec).__name__}")
    return decoded


def _payload(text: str, kind: pem.EnvelopeKind) -> bytes:
    """Strips the envelope of `kind`, if any, and base64-decodes the payload.

    Raises:
        EnvelopeMismatch: If the text is wrapped in another envelope.
        FormatInvalid: If the payload is not base64.
    """
    text = text.strip()
    found = pem.sniff(text)
    if found is not None and found is not kind:
        raise EnvelopeMismatch(f"Expected a {kind.label} block, got {found.label}")
    try:
        return base64.b64decode(pem.unwrap(text, kind), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise FormatInvalid(f"{kind.label} payload is not valid base64.") from exc


def _armor(der: bytes, kind: pem.EnvelopeKind) -> str:
    return pem.wrap(base64.b64encode(der).decode("ascii"), kind)


def _require_private(material: KeyMaterial) -> None:
    if not material.is_private:
        raise MaterialIncomplete("Private key container requested for public key material.")


def pkcs1_der(material: KeyMaterial) -> bytes:
    """Encodes private material as a DER RSAPrivateKey (PKCS1).

    Raises:
        MaterialIncomplete: If the material is public only.
    """
    _require_private(material)
    numbers = material.to_integers()
    keydata = rfc8017.RSAPrivateKey()
    keydata["version"] = 0
    for field, component in PKCS1_COMPONENTS.items():
        keydata[component] = numbers[field]
    return encoder.encode(keydata)


def pkcs1_from_der(payload: bytes) -> KeyMaterial:
    """Decodes a DER RSAPrivateKey (PKCS1).

    Raises:
        FormatInvalid: On DER errors or multi-prime keys.
    """
    keydata = _decode_der(payload, rfc8017.RSAPrivateKey())
    if keydata["version"] != 0:
        raise FormatInvalid("Multi-prime keys are not supported.")
    pykeyd = localize.encode(keydata)
    return KeyMaterial.from_integers(**{field: pykeyd[component] for field, component in PKCS1_COMPONENTS.items()})


def pkcs8_der(material: KeyMaterial) -> bytes:
    """Encodes private material as a DER PrivateKeyInfo (PKCS8) around a PKCS1 key.

    Raises:
        MaterialIncomplete: If the material is public only.
    """
    encoded = pkcs1_der(material)
    pkalgo = rfc5208.AlgorithmIdentifier()
    _rsa_algorithm(pkalgo)
    pkraw = rfc5208.PrivateKeyInfo()
    pkraw["version"] = 0
    pkraw["privateKeyAlgorithm"] = pkalgo
    pkraw["privateKey"] = encoded
    return encoder.encode(pkraw)


def pkcs8_from_der(payload: bytes) -> KeyMaterial:
    """Decodes a DER PrivateKeyInfo (PKCS8) holding an RSA key.

    Raises:
        FormatInvalid: On DER errors, unsupported wrapper versions or a non-RSA key.
    """
    decdata = _decode_der(payload, rfc5208.PrivateKeyInfo())
    if decdata["version"] != 0:
        raise FormatInvalid("Unsupported version of private key information wrapper")
    if decdata["privateKeyAlgorithm"]["algorithm"] != rfc8017.rsaEncryption:
        raise FormatInvalid("Private Key Algorithm not supported.")
    return pkcs1_from_der(decdata["privateKey"].asOctets())


def spki_der(material: KeyMaterial) -> bytes:
    """Encodes the public half of the material as a DER SubjectPublicKeyInfo."""
    numbers = material.to_integers()
    keydata = rfc8017.RSAPublicKey()
    keydata["modulus"] = numbers["modulus"]
    keydata["publicExponent"] = numbers["public_exponent"]
    pkalgo = rfc5280.AlgorithmIdentifier()
    _rsa_algorithm(pkalgo)
    spki = rfc5280.SubjectPublicKeyInfo()
    spki["algorithm"] = pkalgo
    spki["subjectPublicKey"] = univ.BitString.fromOctetString(encoder.encode(keydata))
    return encoder.encode(spki)


def spki_from_der(payload: bytes) -> KeyMaterial:
    """Decodes a DER SubjectPublicKeyInfo holding an RSA public key.

    Raises:
        FormatInvalid: On DER errors or a non-RSA key.
    """
    spki = _decode_der(payload, rfc5280.SubjectPublicKeyInfo())
    if spki["algorithm"]["algorithm"] != rfc8017.rsaEncryption:
        raise FormatInvalid("Public Key Algorithm not supported.")
    keydata = _decode_der(spki["subjectPublicKey"].asOctets(), rfc8017.RSAPublicKey())
    pykeyd = localize.encode(keydata)
    return KeyMaterial.from_integers(pykeyd["modulus"], pykeyd["publicExponent"])


def decode_pkcs1_private(text: str) -> KeyMaterial:
    """Decodes a PKCS1 private key, PEM wrapped or not."""
    return pkcs1_from_der(_payload(text, pem.EnvelopeKind.PKCS1_PRIVATE))


def decode_pkcs8_private(text: str) -> KeyMaterial:
    """Decodes a PKCS8 private key, PEM wrapped or not."""
    return pkcs8_from_der(_payload(text, pem.EnvelopeKind.PKCS8_PRIVATE))


def decode_public(text: str) -> KeyMaterial:
    """Decodes a SubjectPublicKeyInfo public key, PEM wrapped or not."""
    return spki_from_der(_payload(text, pem.EnvelopeKind.PUBLIC))


def encode_pkcs1_private(material: KeyMaterial) -> str:
    """Encodes private material as a PEM PKCS1 private key.

    Raises:
        MaterialIncomplete: If the material is public only.
    """
    return _armor(pkcs1_der(material), pem.EnvelopeKind.PKCS1_PRIVATE)


def encode_pkcs8_private(material: KeyMaterial) -> str:
    """Encodes private material as a PEM PKCS8 private key.

    Raises:
        MaterialIncomplete: If the material is public only.
    """
    return _armor(pkcs8_der(material), pem.EnvelopeKind.PKCS8_PRIVATE)


def encode_public(material: KeyMaterial) -> str:
    """Encodes the public half of the material as a PEM public key."""
    return _armor(spki_der(material), pem.EnvelopeKind.PUBLIC)
