"""The canonical in-memory representation of RSA key material.

Holds the numeric RSA fields as unsigned big-endian byte strings, independent of whichever textual format they came
from or are headed to. Every codec in the package produces or consumes a `KeyMaterial`.

Typical usage example:

    km = KeyMaterial.from_integers(n, e, d, p, q, dp, dq, qinv)
    pub = km.public()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsakeyconv.errors import MaterialIncomplete

PUBLIC_FIELDS = ("modulus", "public_exponent")
PRIVATE_FIELDS = ("private_exponent", "prime_p", "prime_q", "exponent_dp", "exponent_dq", "coefficient_qinv")
FIELDS = PUBLIC_FIELDS + PRIVATE_FIELDS


class KeyMaterial:
    """RSA key fields, either the public pair or the full CRT set.

    Attributes:
        modulus: n.
        public_exponent: e.
        private_exponent: d, private material only.
        prime_p: First prime factor, private material only.
        prime_q: Second prime factor, private material only.
        exponent_dp: d mod (p - 1), private material only.
        exponent_dq: d mod (q - 1), private material only.
        coefficient_qinv: q^-1 mod p, private material only.
    """
    __slots__ = FIELDS

    def __init__(self,
                 modulus: bytes | None,
                 public_exponent: bytes | None,
                 private_exponent: bytes | None = None,
                 prime_p: bytes | None = None,
                 prime_q: bytes | None = None,
                 exponent_dp: bytes | None = None,
                 exponent_dq: bytes | None = None,
                 coefficient_qinv: bytes | None = None) -> None:
        """Initialize the key material.

        Raises:
            MaterialIncomplete: If the public fields are missing or only part of the private fields is given.
            TypeError: If a field is neither bytes nor None.
        """
        values = (modulus, public_exponent, private_exponent, prime_p, prime_q, exponent_dp, exponent_dq,
                  coefficient_qinv)
        for name, value in zip(FIELDS, values):
            if value is not None and not isinstance(value, (bytes, bytearray)):
                raise TypeError(f"{name} must be bytes, not {type(value).__name__}")
        missing = [name for name, value in zip(PUBLIC_FIELDS, values[:2]) if value is None]
        if missing:
            raise MaterialIncomplete(f"Key material is missing mandatory fields: {', '.join(missing)}")
        present = [value is not None for value in values[2:]]
        if any(present) and not all(present):
            absent = [name for name, flag in zip(PRIVATE_FIELDS, present) if not flag]
            raise MaterialIncomplete(f"Private key material is missing fields: {', '.join(absent)}")
        for name, value in zip(FIELDS, values):
            object.__setattr__(self, name, bytes(value) if value is not None else None)

    def __setattr__(self, name, value):
        raise AttributeError("KeyMaterial is immutable")

    def __eq__(self, other):
        if not isinstance(other, KeyMaterial):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in FIELDS)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in FIELDS))

    def __repr__(self):
        # Never echo the numbers themselves.
        kind = "private" if self.is_private else "public"
        return f"<KeyMaterial {kind} {self.key_size} bits>"

    @property
    def is_private(self) -> bool:
        return self.private_exponent is not None

    @property
    def key_size(self) -> int:
        """Bit length of the modulus."""
        return bytes_to_integer(self.modulus).bit_length()

    def public(self) -> "KeyMaterial":
        """Extracts the public half of the material."""
        return KeyMaterial(self.modulus, self.public_exponent)

    def to_integers(self) -> dict[str, int]:
        """Returns the present fields as a name to integer mapping."""
        return {name: bytes_to_integer(getattr(self, name)) for name in FIELDS if getattr(self, name) is not None}

    @classmethod
    def from_integers(cls,
                      modulus: int,
                      public_exponent: int,
                      private_exponent: int | None = None,
                      prime_p: int | None = None,
                      prime_q: int | None = None,
                      exponent_dp: int | None = None,
                      exponent_dq: int | None = None,
                      coefficient_qinv: int | None = None) -> "KeyMaterial":
        """Builds key material from integers using the minimal unsigned big-endian encoding.

        Returns:
            The resulting key material.

        Raises:
            MaterialIncomplete: Under the same conditions as the constructor.
        """
        values = (modulus, public_exponent, private_exponent, prime_p, prime_q, exponent_dp, exponent_dq,
                  coefficient_qinv)
        return cls(*(integer_to_bytes(v) if v is not None else None for v in values))


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts an integer to a string, using a fixed-length byte representation.

    Args:
        msg: The integer to unmarshal. Must be non-negative.
        fixedlen: The target length of the byte string.
            If not provided the shortest representation is used, zero becoming the empty string.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    if fixedlen is None:
        fixedlen = (msg.bit_length() + 7) // 8
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)
