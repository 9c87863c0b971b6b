"""
TransactionAssembler Unit Tests
===============================
Compute-budget ordering and message compilation.
"""

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey

COMPUTE_BUDGET_PROGRAM = Pubkey.from_string("ComputeBudget111111111111111111111111111111")


@pytest.fixture
def domain_ix(program_id):
    from feed_updater.execution.instruction_factory import (
        InstructionPayloadBuilder,
        build_update_price_instruction,
    )

    payload = InstructionPayloadBuilder().build(12345000000, -8)
    return build_update_price_instruction(program_id, Pubkey.new_unique(), payload)


@pytest.fixture
def anchor():
    from feed_updater.execution.transaction_assembler import FreshnessAnchor
    return FreshnessAnchor(Hash.new_unique(), 250)


class TestInstructionOrder:
    """price, limit, domain."""

    def test_compute_budget_first(self, domain_ix):
        from feed_updater.execution.transaction_assembler import TransactionAssembler

        ixs = TransactionAssembler(10_000, 200_000).build_instructions(domain_ix)

        assert len(ixs) == 3
        assert ixs[0].program_id == COMPUTE_BUDGET_PROGRAM
        assert ixs[1].program_id == COMPUTE_BUDGET_PROGRAM
        assert ixs[2] == domain_ix

    def test_price_then_limit(self, domain_ix):
        from feed_updater.execution.transaction_assembler import TransactionAssembler

        price_ix, limit_ix = TransactionAssembler(10_000, 200_000).build_compute_budget_instructions()

        # ComputeBudgetInstruction: 2 = SetComputeUnitLimit(u32), 3 = SetComputeUnitPrice(u64)
        assert bytes(price_ix.data)[0] == 3
        assert int.from_bytes(bytes(price_ix.data)[1:9], "little") == 10_000
        assert bytes(limit_ix.data)[0] == 2
        assert int.from_bytes(bytes(limit_ix.data)[1:5], "little") == 200_000


class TestAssemble:
    """Binding to fee payer and freshness anchor."""

    def test_compile(self, domain_ix, anchor, keypair, program_id):
        from feed_updater.execution.transaction_assembler import TransactionAssembler

        assembler = TransactionAssembler()
        tx = assembler.assemble(assembler.build_instructions(domain_ix), keypair.pubkey(), anchor)
        message = tx.compile()

        assert message.recent_blockhash == anchor.blockhash
        assert message.account_keys[0] == keypair.pubkey()
        assert message.header.num_required_signatures == 1

        program_ids = [message.account_keys[ix.program_id_index] for ix in message.instructions]
        assert program_ids == [COMPUTE_BUDGET_PROGRAM, COMPUTE_BUDGET_PROGRAM, program_id]

    def test_empty_instructions_rejected(self, anchor, keypair):
        from feed_updater.execution.transaction_assembler import TransactionAssembler

        with pytest.raises(ValueError, match="No instructions"):
            TransactionAssembler().assemble([], keypair.pubkey(), anchor)

    def test_anchor_str_is_short(self, anchor):
        assert "valid to 250" in str(anchor)
