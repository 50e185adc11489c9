"""
Pytest configuration for off-chain tests

Shared fixtures: settings without a .env file, a mock chain, a mock signer
and an actions instance whose finalization is intercepted.
"""

import pycardano as pc
import pytest

from showcase_offchain.actions import ShowcaseActions
from showcase_offchain.config import Settings
from showcase_offchain.scripts import ScriptResolver
from showcase_offchain.session import SessionRegistry
from showcase_offchain.transactions import TransactionAssembler

from .mocks import SAMPLE_TX_ID, FakeSignedTx, MockLedger, MockPyCardanoContext, MockWallet, fake_compile


@pytest.fixture
def settings():
    """Settings independent of the local environment"""
    return Settings(_env_file=None, blockfrost_api_key="preview_test", wallet_mnemonic=None)


@pytest.fixture
def chain():
    return MockPyCardanoContext()


@pytest.fixture
def wallet():
    return MockWallet()


@pytest.fixture
def ledger():
    return MockLedger()


@pytest.fixture
def resolver():
    return ScriptResolver(pc.Network.TESTNET, compiler=fake_compile)


@pytest.fixture(autouse=True)
def fixed_min_lovelace(monkeypatch):
    """Minimum UTxO value needs protocol parameters, use a constant instead"""
    monkeypatch.setattr(pc, "min_lovelace", lambda context, output=None, **kwargs: 1_500_000)


@pytest.fixture
def assembler(chain, settings):
    return TransactionAssembler(chain, settings)


@pytest.fixture
def drafts(assembler, monkeypatch):
    """Drafts handed to finalize, in order; finalize returns a fake signed tx"""
    captured = []

    def finalize(draft, signing_keys):
        captured.append(draft)
        return FakeSignedTx(SAMPLE_TX_ID)

    monkeypatch.setattr(assembler, "finalize", finalize)
    return captured


@pytest.fixture
def actions(wallet, ledger, assembler, resolver, settings, drafts):
    return ShowcaseActions(wallet, ledger, assembler, resolver, SessionRegistry(), settings)
