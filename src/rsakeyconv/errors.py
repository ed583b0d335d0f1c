"""Error kinds raised while decoding, encoding or generating RSA key material.

All of them derive from `RSAKeyError`, itself a `ValueError`, so callers that only care about "bad key input" can
catch a single type.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAKeyError(ValueError):
    """Base class for all key material errors."""


class MaterialIncomplete(RSAKeyError):
    """Key material lacks fields required by the requested operation.

    Raised when a private container is requested for public-only material, or when a mandatory field is missing
    from the input.
    """


class FormatInvalid(RSAKeyError):
    """Input could not be parsed as an RSA key of the expected kind."""


class EnvelopeMismatch(FormatInvalid):
    """PEM envelope label does not match the requested kind."""


class InvalidKeySize(RSAKeyError):
    """Key size rejected by the key generation primitive."""
