"""
Test bootstrap:
- Deterministic keypairs shared by the recorded envelope tests
- Isolate the process-wide builder config from the caller's environment
"""
import pytest

from stellar_txnbuild.config import set_config, ENV_NETWORK_PASSPHRASE, ENV_BASE_FEE
from stellar_txnbuild.crypto import Keypair

SEED0 = "SBPQUZ6G4FZNWFHKUWC5BEYWF6R52E3SEP7R3GWYSM2XTKGF5LNTWW4R"
SEED1 = "SBMSVD4KKELKGZXHBUQTIROWUAPQASDX7KEJITARP4VMZ6KLUHOGPTYW"
SEED2 = "SBZVMB74Z76QZ3ZOY7UTDFYKMEGKW5XFJEB6PFKBF4UYSSWHG4EDH7PY"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.delenv(ENV_NETWORK_PASSPHRASE, raising=False)
    monkeypatch.delenv(ENV_BASE_FEE, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def kp0():
    """GDQNY3PBOJOKYZSRMK2S7LHHGWZIUISD4QORETLMXEWXBI7KFZZMKTL3"""
    return Keypair.from_secret(SEED0)


@pytest.fixture
def kp1():
    """GAS4V4O2B7DW5T7IQRPEEVCRXMDZESKISR7DVIGKZQYYV3OSQ5SH5LVP"""
    return Keypair.from_secret(SEED1)


@pytest.fixture
def kp2():
    """GB7BDSZU2Y27LYNLALKKALB52WS2IZWYBDGY6EQBLEED3TJOCVMZRH7H"""
    return Keypair.from_secret(SEED2)
