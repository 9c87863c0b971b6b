"""
Transaction Assembler
=====================
Binds the ordered instruction list to a fee payer and a freshness anchor.

Order is fixed and significant:
1. SetComputeUnitPrice (priority fee)
2. SetComputeUnitLimit
3. update_price
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class FreshnessAnchor:
    """Recent blockhash plus the last block height at which it is accepted."""

    blockhash: Hash
    last_valid_block_height: int

    def __str__(self) -> str:
        return f"{str(self.blockhash)[:16]}... (valid to {self.last_valid_block_height})"


@dataclass(frozen=True)
class AssembledTransaction:
    """Ordered instructions bound to a fee payer and anchor; unsigned."""

    instructions: tuple
    fee_payer: Pubkey
    anchor: FreshnessAnchor

    def compile(self) -> MessageV0:
        return MessageV0.try_compile(
            payer=self.fee_payer,
            instructions=list(self.instructions),
            address_lookup_table_accounts=[],
            recent_blockhash=self.anchor.blockhash,
        )


class TransactionAssembler:
    """
    Composes compute-budget directives with the domain instruction.

    Usage:
        assembler = TransactionAssembler(priority_fee=10_000, compute_units=200_000)
        ixs = assembler.build_instructions(update_ix)
        tx = assembler.assemble(ixs, payer, anchor)
    """

    def __init__(self, priority_fee: int = 10_000, compute_units: int = 200_000):
        """
        Args:
            priority_fee: Compute unit price in micro-lamports
            compute_units: Compute unit limit
        """
        self.priority_fee = priority_fee
        self.compute_units = compute_units

    def build_compute_budget_instructions(self) -> List[Instruction]:
        """[SetComputeUnitPrice, SetComputeUnitLimit], in that order."""
        return [
            set_compute_unit_price(self.priority_fee),
            set_compute_unit_limit(self.compute_units),
        ]

    def build_instructions(self, domain_instruction: Instruction) -> List[Instruction]:
        return self.build_compute_budget_instructions() + [domain_instruction]

    def assemble(
        self,
        instructions: Sequence[Instruction],
        fee_payer: Pubkey,
        anchor: FreshnessAnchor,
    ) -> AssembledTransaction:
        if not instructions:
            raise ValueError("No instructions to assemble")

        return AssembledTransaction(
            instructions=tuple(instructions),
            fee_payer=fee_payer,
            anchor=anchor,
        )
