# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

from rsakeyconv import convert
from rsakeyconv import rsa as rsau
from rsakeyconv.convert import KeyFormat
from rsakeyconv.errors import FormatInvalid
from rsakeyconv.errors import MaterialIncomplete
from rsakeyconv.material import KeyMaterial

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""


@pytest.fixture(scope="module", params=rsau.HASHES.keys())
def hashf(request) -> str:
    return request.param


@pytest.fixture(scope="module", params=list(KeyFormat))
def fmt(request) -> KeyFormat:
    return request.param


def localize_material(pk: rsa.RSAPrivateKey) -> KeyMaterial:
    privs = pk.private_numbers()
    pubs = privs.public_numbers
    return KeyMaterial.from_integers(pubs.n, pubs.e, privs.d, privs.p, privs.q, privs.dmp1, privs.dmq1, privs.iqmp)


def localize_keys(pk: rsa.RSAPrivateKey, fmt: KeyFormat) -> tuple[str, str]:
    """Returns (public, private) key texts."""
    km = localize_material(pk)
    return convert.encode_public(km.public(), fmt), convert.encode_private(km, fmt)


def capload(hashf: str, keysz: int, pad: str = "oaep") -> str:
    """Returns a payload capped to what the padding can carry."""
    if pad == "oaep":
        max_len = keysz // 8 - 2 * (rsau.HASHES[hashf].digest_size + 1)
    else:
        max_len = keysz // 8 - 11
    if max_len <= 0:
        pytest.skip(f"Key size {keysz} is too small for {hashf}.")
    return standard_payload[:max_len]


def test_runtime_key_private(keyset):
    km = localize_material(keyset)
    key = rsau.to_runtime_key(km)
    assert key.private_numbers() == keyset.private_numbers()


def test_runtime_key_public(keyset):
    km = localize_material(keyset)
    for material in (km, km.public()):
        key = rsau.to_runtime_key(material, "public")
        assert key.public_numbers() == keyset.public_key().public_numbers()


def test_runtime_key_private_from_public(small_key):
    with pytest.raises(MaterialIncomplete):
        rsau.to_runtime_key(localize_material(small_key).public(), "private")


def test_runtime_key_validates_role(small_key):
    with pytest.raises(ValueError, match="Unknown key role"):
        rsau.to_runtime_key(localize_material(small_key), "secret")


def test_runtime_key_rejects_inconsistent(small_key):
    nums = localize_material(small_key).to_integers()
    nums["modulus"] += 2
    bad = KeyMaterial.from_integers(*nums.values())
    with pytest.raises(FormatInvalid, match="Key material rejected"):
        rsau.to_runtime_key(bad)
    with pytest.raises(FormatInvalid):
        rsau.to_runtime_key(KeyMaterial.from_integers(nums["modulus"], 1), "public")


def test_util_needs_a_key():
    with pytest.raises(ValueError, match="Public and private keys must not be empty at the same time"):
        rsau.RSAUtil()
    with pytest.raises(ValueError):
        rsau.RSAUtil("", "")


def test_util_private_implies_public(small_key, fmt):
    _, private_text = localize_keys(small_key, fmt)
    util = rsau.RSAUtil(private_key=private_text, key_format=fmt)
    assert util.public_key.public_numbers() == small_key.public_key().public_numbers()


def test_util_public_only(small_key, fmt):
    public_text, _ = localize_keys(small_key, fmt)
    util = rsau.RSAUtil(public_key=public_text, key_format=fmt)
    assert util.private_key is None
    ciphtext = util.encrypt("Hi there!")
    with pytest.raises(ValueError, match="private key can not be empty"):
        util.decrypt(ciphtext)
    with pytest.raises(ValueError, match="private key can not be empty"):
        util.sign("Hi there!")


def test_util_accepts_format_names(small_key):
    _, private_text = localize_keys(small_key, KeyFormat.XML)
    util = rsau.RSAUtil(private_key=private_text, key_format="XML")
    assert util.key_format is KeyFormat.XML


def test_util_wrong_format(small_key):
    _, private_text = localize_keys(small_key, KeyFormat.XML)
    with pytest.raises(FormatInvalid):
        rsau.RSAUtil(private_key=private_text, key_format=KeyFormat.PKCS8)


def test_encrypt_oaep(keyset, hashf):
    public_text, _ = localize_keys(keyset, KeyFormat.PKCS8)
    util = rsau.RSAUtil(public_key=public_text)
    payload = capload(hashf, keyset.key_size)
    cr_hashf = getattr(hashes, hashf.upper())
    dec = keyset.decrypt(base64.b64decode(util.encrypt(payload, hashf=hashf)),
                         padding.OAEP(mgf=padding.MGF1(algorithm=cr_hashf()), algorithm=cr_hashf(), label=None))
    assert dec.decode("utf-8") == payload


def test_decrypt_oaep(keyset, hashf):
    _, private_text = localize_keys(keyset, KeyFormat.PKCS1)
    util = rsau.RSAUtil(private_key=private_text, key_format=KeyFormat.PKCS1)
    payload = capload(hashf, keyset.key_size)
    cr_hashf = getattr(hashes, hashf.upper())
    ciphtext = keyset.public_key().encrypt(
        payload.encode("utf-8"), padding.OAEP(mgf=padding.MGF1(algorithm=cr_hashf()), algorithm=cr_hashf(), label=None))
    assert util.decrypt(base64.b64encode(ciphtext).decode("ascii"), hashf=hashf) == payload


@pytest.mark.parametrize("pad", rsau.ENCRYPTION_PADDINGS)
def test_encrypt_decrypt(small_key, fmt, pad):
    public_text, private_text = localize_keys(small_key, fmt)
    payload = capload("sha256", small_key.key_size, pad)
    ciphtext = rsau.RSAUtil(public_key=public_text, key_format=fmt).encrypt(payload, pad)
    cleartext = rsau.RSAUtil(private_key=private_text, key_format=fmt).decrypt(ciphtext, pad)
    assert cleartext == payload


def test_decrypt_wrong_padding_fails(small_key):
    _, private_text = localize_keys(small_key, KeyFormat.PKCS8)
    util = rsau.RSAUtil(private_key=private_text)
    ciphtext = util.encrypt("Hi there!", "pkcs1v15")
    with pytest.raises(ValueError):
        util.decrypt(ciphtext, "oaep")


def test_paddings_validate(small_key):
    _, private_text = localize_keys(small_key, KeyFormat.PKCS8)
    util = rsau.RSAUtil(private_key=private_text)
    with pytest.raises(ValueError, match="Unknown encryption padding"):
        util.encrypt("ABBA", "academic")
    with pytest.raises(ValueError, match="Unknown signature padding"):
        util.sign("ABBA", padding="oaep")


def test_hashes_validate(small_key):
    _, private_text = localize_keys(small_key, KeyFormat.PKCS8)
    util = rsau.RSAUtil(private_key=private_text)
    with pytest.raises(ValueError, match="Unknown hash function md5"):
        util.encrypt("ABBA", hashf="md5")
    with pytest.raises(ValueError, match="Unknown hash function md5"):
        util.sign("ABBA", "md5")
    signature = util.sign("ABBA")
    for pad in rsau.SIGNATURE_PADDINGS:
        with pytest.raises(ValueError, match="Unknown hash function md5"):
            util.verify("ABBA", signature, "md5", pad)


def test_sign(keyset, hashf):
    _, private_text = localize_keys(keyset, KeyFormat.XML)
    util = rsau.RSAUtil(private_key=private_text, key_format=KeyFormat.XML)
    signature = base64.b64decode(util.sign(standard_payload, hashf))
    cr_hashf = getattr(hashes, hashf.upper())
    keyset.public_key().verify(signature, standard_payload.encode("utf-8"), padding.PKCS1v15(), cr_hashf())


def test_sign_bytes_is_raw(small_key):
    _, private_text = localize_keys(small_key, KeyFormat.PKCS8)
    util = rsau.RSAUtil(private_key=private_text)
    raw = util.sign_bytes(standard_payload)
    assert len(raw) == small_key.key_size // 8
    assert base64.b64encode(raw).decode("ascii") == util.sign(standard_payload)


def test_verify(keyset, hashf):
    public_text, _ = localize_keys(keyset, KeyFormat.XML)
    util = rsau.RSAUtil(public_key=public_text, key_format=KeyFormat.XML)
    cr_hashf = getattr(hashes, hashf.upper())
    signature = keyset.sign(standard_payload.encode("utf-8"), padding.PKCS1v15(), cr_hashf())
    assert util.verify(standard_payload, base64.b64encode(signature).decode("ascii"), hashf)


@pytest.mark.parametrize("pad", rsau.SIGNATURE_PADDINGS)
def test_sign_verify(small_key, fmt, hashf, pad):
    public_text, private_text = localize_keys(small_key, fmt)
    signature = rsau.RSAUtil(private_key=private_text, key_format=fmt).sign(standard_payload, hashf, pad)
    assert rsau.RSAUtil(public_key=public_text, key_format=fmt).verify(standard_payload, signature, hashf, pad)


def test_verify_mismatch_fails(small_key, fmt):
    public_text, private_text = localize_keys(small_key, fmt)
    correct_signature = rsau.RSAUtil(private_key=private_text, key_format=fmt).sign(standard_payload)
    pubkey = rsau.RSAUtil(public_key=public_text, key_format=fmt)
    assert not pubkey.verify("NONSTANDARDPAYLOAD", correct_signature)
    assert not pubkey.verify(standard_payload, correct_signature, "sha512")
    assert not pubkey.verify(standard_payload, correct_signature, padding="pss")


def test_verify_other_key_fails(small_key):
    other = rsa.generate_private_key(public_exponent=65537, key_size=1024)
    _, private_text = localize_keys(other, KeyFormat.PKCS8)
    public_text, _ = localize_keys(small_key, KeyFormat.PKCS8)
    signature = rsau.RSAUtil(private_key=private_text).sign(standard_payload)
    assert not rsau.RSAUtil(public_key=public_text).verify(standard_payload, signature)


def test_util_encoding(small_key):
    public_text, private_text = localize_keys(small_key, KeyFormat.PKCS1)
    util = rsau.RSAUtil(public_text, private_text, KeyFormat.PKCS1, encoding="utf-16")
    payload = "Grüße aus Wien"
    assert util.decrypt(util.encrypt(payload)) == payload
    assert util.verify(payload, util.sign(payload))
