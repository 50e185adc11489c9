"""
Tests for script template resolution
"""

import pycardano as pc
from opshin.prelude import TxId, TxOutRef

from showcase_offchain.scripts import CONTRACTS_DIR, ScriptResolver, ScriptTemplate, resolve_script

from .mocks import fake_compile


class CountingCompiler:
    """Fake compiler recording how often it runs"""

    def __init__(self):
        self.calls = 0

    def __call__(self, path, *params):
        self.calls += 1
        return fake_compile(path, *params)


def nonce(tx_byte: str = "a", idx: int = 0) -> TxOutRef:
    return TxOutRef(id=TxId(bytes.fromhex(tx_byte * 64)), idx=idx)


class TestScriptResolver:
    """Address and policy derivation"""

    def setup_method(self):
        self.compiler = CountingCompiler()
        self.resolver = ScriptResolver(pc.Network.TESTNET, compiler=self.compiler)
        self.owner = bytes.fromhex("e" * 56)

    def test_templates_exist(self):
        for template in ScriptTemplate:
            assert template.path.exists(), template.value
            assert template.path.is_relative_to(CONTRACTS_DIR)

    def test_identity_parameter_is_deterministic(self):
        first = self.resolver.resolve(ScriptTemplate.SC_WALLET, [self.owner])
        second = self.resolver.resolve(ScriptTemplate.SC_WALLET, [self.owner])

        assert first.address == second.address
        assert first.policy_id == second.policy_id
        assert self.compiler.calls == 1

    def test_fresh_resolver_gives_same_address(self):
        first = self.resolver.resolve(ScriptTemplate.ADMIN, [self.owner])
        other = ScriptResolver(pc.Network.TESTNET, compiler=fake_compile)
        assert other.resolve(ScriptTemplate.ADMIN, [self.owner]).address == first.address

    def test_different_identity_changes_address(self):
        first = self.resolver.resolve(ScriptTemplate.SC_WALLET, [self.owner])
        second = self.resolver.resolve(ScriptTemplate.SC_WALLET, [bytes.fromhex("d" * 56)])
        assert first.address != second.address

    def test_seed_parameter_changes_policy(self):
        first = self.resolver.resolve(ScriptTemplate.CIP68_NFTS, [nonce("a", 0)])
        same = self.resolver.resolve(ScriptTemplate.CIP68_NFTS, [nonce("a", 0)])
        other_index = self.resolver.resolve(ScriptTemplate.CIP68_NFTS, [nonce("a", 1)])
        other_tx = self.resolver.resolve(ScriptTemplate.CIP68_NFTS, [nonce("b", 0)])

        assert first.policy_id == same.policy_id
        assert first.policy_id != other_index.policy_id
        assert first.policy_id != other_tx.policy_id

    def test_templates_differ(self):
        datum = self.resolver.resolve(ScriptTemplate.CHECK_DATUM)
        redeemer = self.resolver.resolve(ScriptTemplate.CHECK_REDEEMER)
        assert datum.address != redeemer.address

    def test_address_is_script_address_on_network(self):
        resolved = self.resolver.resolve(ScriptTemplate.CHECK_DATUM)

        assert resolved.address.network == pc.Network.TESTNET
        assert resolved.address.payment_part == resolved.policy_id
        assert resolved.policy_id == pc.plutus_script_hash(resolved.script)
        assert resolved.policy_id_hex == resolved.policy_id.payload.hex()

    def test_resolve_fetched_script(self):
        resolved = self.resolver.resolve(ScriptTemplate.CIP68_STORE, [bytes.fromhex("b" * 56)])
        again = resolve_script(pc.PlutusV2Script(bytes(resolved.script)), pc.Network.TESTNET)
        assert again.address == resolved.address
