import pytest


@pytest.fixture
def mnemonic():
    return "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"


@pytest.fixture
def seed():
    return bytes(range(64))
