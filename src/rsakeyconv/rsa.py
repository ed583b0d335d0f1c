"""Encryption, decryption, signing and verification over keys in any supported format.

The RSA operations themselves (padding included) are delegated to `cryptography`; this module turns `KeyMaterial`
into runtime keys and handles the text marshalling around them. One facade serves all formats, the format only picks
the decoder.

Typical usage example:

    util = RSAUtil(private_key=pem_text, key_format=KeyFormat.PKCS1)
    c = util.encrypt("Hi there!")
    r = util.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric import rsa

from rsakeyconv import convert
from rsakeyconv.convert import KeyFormat
from rsakeyconv.errors import FormatInvalid
from rsakeyconv.errors import MaterialIncomplete
from rsakeyconv.material import KeyMaterial

HASHES = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}

ENCRYPTION_PADDINGS = ("oaep", "pkcs1v15")
SIGNATURE_PADDINGS = ("pkcs1v15", "pss")


def to_runtime_key(material: KeyMaterial, role: str = "private") -> rsa.RSAPublicKey | rsa.RSAPrivateKey:
    """Builds a `cryptography` key object from key material.

    This is where the numbers meet the primitive: inconsistent material (say, a modulus that is not p * q) is
    rejected here and not during format conversion.

    Args:
        material: The key material.
        role: Either "public" or "private".

    Returns:
        An RSAPublicKey or RSAPrivateKey.

    Raises:
        MaterialIncomplete: If a private key is requested from public material.
        FormatInvalid: If the primitive rejects the numbers.
    """
    if role not in ("public", "private"):
        raise ValueError(f"Unknown key role {role}")
    if role == "private" and not material.is_private:
        raise MaterialIncomplete("Private key requested from public key material.")
    nums = material.to_integers()
    pubnums = rsa.RSAPublicNumbers(nums["public_exponent"], nums["modulus"])
    try:
        if role == "public":
            return pubnums.public_key()
        return rsa.RSAPrivateNumbers(nums["prime_p"], nums["prime_q"], nums["private_exponent"], nums["exponent_dp"],
                                     nums["exponent_dq"], nums["coefficient_qinv"], pubnums).private_key()
    except ValueError as exc:
        raise FormatInvalid(f"Key material rejected: {exc}") from exc


def _hash(hashf: str) -> hashes.HashAlgorithm:
    if hashf not in HASHES:
        raise ValueError(f"Unknown hash function {hashf}")
    return HASHES[hashf]()


def _encryption_padding(padding: str, hashf: str) -> asym_padding.AsymmetricPadding:
    if padding == "oaep":
        return asym_padding.OAEP(mgf=asym_padding.MGF1(algorithm=_hash(hashf)), algorithm=_hash(hashf), label=None)
    if padding == "pkcs1v15":
        return asym_padding.PKCS1v15()
    raise ValueError(f"Unknown encryption padding {padding}")


def _signature_padding(padding: str, hashf: str) -> asym_padding.AsymmetricPadding:
    if padding == "pss":
        return asym_padding.PSS(mgf=asym_padding.MGF1(_hash(hashf)), salt_length=asym_padding.PSS.MAX_LENGTH)
    if padding == "pkcs1v15":
        return asym_padding.PKCS1v15()
    raise ValueError(f"Unknown signature padding {padding}")


class RSAUtil:
    """RSA operations over keys loaded from text.

    Attributes:
        key_format: The format both keys were provided in.
        encoding: Text encoding of payloads.
        private_key: The runtime private key, if one was given.
        public_key: The runtime public key. Derived from the private key if not given.
    """

    def __init__(self,
                 public_key: str | None = None,
                 private_key: str | None = None,
                 key_format: KeyFormat = KeyFormat.PKCS8,
                 encoding: str = "utf-8") -> None:
        """Initialize the facade.

        Args:
            public_key: Public key text.
            private_key: Private key text.
            key_format: Format of the key texts.
            encoding: Text encoding used for payloads and cleartexts.

        Raises:
            ValueError: If neither key is given.
            RSAKeyError: Any of its subclasses, if a key cannot be decoded.
        """
        if not public_key and not private_key:
            raise ValueError("Public and private keys must not be empty at the same time")
        self.key_format = KeyFormat(key_format)
        self.encoding = encoding
        self.private_key: rsa.RSAPrivateKey | None = None
        self.public_key: rsa.RSAPublicKey | None = None
        if private_key:
            material = convert.decode_private(private_key, self.key_format)
            self.private_key = to_runtime_key(material, "private")
            self.public_key = self.private_key.public_key()
        if public_key:
            self.public_key = to_runtime_key(convert.decode_public(public_key, self.key_format), "public")

    def _need(self, role: str):
        key = self.private_key if role == "private" else self.public_key
        if key is None:
            raise ValueError(f"{role} key can not be empty")
        return key

    def encrypt(self, data: str, padding: str = "oaep", hashf: str = "sha256") -> str:
        """Encrypts text with the public key.

        Args:
            data: The cleartext.
            padding: "oaep" or "pkcs1v15".
            hashf: Hash function for OAEP (sha1, sha256, sha384, sha512).

        Returns:
            Base64 encoded ciphertext.
        """
        key = self._need("public")
        ciphertext = key.encrypt(data.encode(self.encoding), _encryption_padding(padding, hashf))
        return base64.b64encode(ciphertext).decode("ascii")

    def decrypt(self, data: str, padding: str = "oaep", hashf: str = "sha256") -> str:
        """Decrypts a base64 encoded ciphertext with the private key.

        Raises:
            ValueError: If decryption fails.
        """
        key = self._need("private")
        cleartext = key.decrypt(base64.b64decode(data), _encryption_padding(padding, hashf))
        return cleartext.decode(self.encoding)

    def sign_bytes(self, data: str, hashf: str = "sha256", padding: str = "pkcs1v15") -> bytes:
        """Signs text with the private key, returning the raw signature."""
        key = self._need("private")
        return key.sign(data.encode(self.encoding), _signature_padding(padding, hashf), _hash(hashf))

    def sign(self, data: str, hashf: str = "sha256", padding: str = "pkcs1v15") -> str:
        """Signs text with the private key.

        Args:
            data: The text to sign.
            hashf: Hash function (sha1, sha256, sha384, sha512).
            padding: "pkcs1v15" or "pss".

        Returns:
            The base64 encoded signature.
        """
        return base64.b64encode(self.sign_bytes(data, hashf, padding)).decode("ascii")

    def verify(self, data: str, signature: str, hashf: str = "sha256", padding: str = "pkcs1v15") -> bool:
        """Verifies a base64 encoded signature with the public key.

        Returns:
            True if the signature matches the text, False otherwise.
        """
        key = self._need("public")
        try:
            key.verify(base64.b64decode(signature), data.encode(self.encoding), _signature_padding(padding, hashf),
                       _hash(hashf))
        except InvalidSignature:
            return False
        return True
