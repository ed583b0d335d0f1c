"""RSA Key Format Conversion Utilities.

Converts RSA keys between PEM PKCS1, PEM PKCS8, PEM SubjectPublicKeyInfo, XML `RSAKeyValue` and the unwrapped
(header-less) base64 forms, generates key pairs directly in any of them and provides an encrypt/decrypt/sign/verify
facade over keys in any supported format.

Typical usage example:

    private_text, public_text = generate_key_pair(KeyFormat.PKCS1, 2048)
    xml = private_key_pkcs1_to_xml(private_text)
    util = RSAUtil(private_key=xml, key_format=KeyFormat.XML)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsakeyconv.convert import convert_key
from rsakeyconv.convert import KeyFormat
from rsakeyconv.convert import private_key_pkcs1_to_pkcs8
from rsakeyconv.convert import private_key_pkcs1_to_xml
from rsakeyconv.convert import private_key_pkcs8_to_pkcs1
from rsakeyconv.convert import private_key_pkcs8_to_xml
from rsakeyconv.convert import private_key_xml_to_pkcs1
from rsakeyconv.convert import private_key_xml_to_pkcs8
from rsakeyconv.convert import public_key_pem_to_xml
from rsakeyconv.convert import public_key_xml_to_pem
from rsakeyconv.errors import EnvelopeMismatch
from rsakeyconv.errors import FormatInvalid
from rsakeyconv.errors import InvalidKeySize
from rsakeyconv.errors import MaterialIncomplete
from rsakeyconv.errors import RSAKeyError
from rsakeyconv.keygen import generate_key_pair
from rsakeyconv.material import KeyMaterial
from rsakeyconv.pem import EnvelopeKind
from rsakeyconv.rsa import RSAUtil
from rsakeyconv.rsa import to_runtime_key

__version__ = "0.1.0"
__all__ = [
    "KeyMaterial",
    "KeyFormat",
    "EnvelopeKind",
    "RSAUtil",
    "to_runtime_key",
    "convert_key",
    "generate_key_pair",
    "public_key_pem_to_xml",
    "public_key_xml_to_pem",
    "private_key_pkcs1_to_xml",
    "private_key_xml_to_pkcs1",
    "private_key_pkcs8_to_xml",
    "private_key_xml_to_pkcs8",
    "private_key_pkcs1_to_pkcs8",
    "private_key_pkcs8_to_pkcs1",
    "RSAKeyError",
    "MaterialIncomplete",
    "FormatInvalid",
    "EnvelopeMismatch",
    "InvalidKeySize",
]
