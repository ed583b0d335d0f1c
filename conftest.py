"""Configures pytest further."""
from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

KEY_SIZES = [1024, 2048, 3072, pytest.param(4096, marks=pytest.mark.slow)]
_known_keys: dict[int, rsa.RSAPrivateKey] = {}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


def get_known_key(size: int) -> rsa.RSAPrivateKey:
    """Reference keys, generated once per session."""
    if size not in _known_keys:
        _known_keys[size] = rsa.generate_private_key(public_exponent=65537, key_size=size)
    return _known_keys[size]


@pytest.fixture(scope="session", params=KEY_SIZES)
def keyset(request) -> rsa.RSAPrivateKey:
    return get_known_key(request.param)


@pytest.fixture(scope="session")
def small_key() -> rsa.RSAPrivateKey:
    return get_known_key(1024)
