import pytest

from .certs import NOW, make_certificate


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def cert_factory():
    return make_certificate
