"""hedera-tools: Hedera ledger operations as agent-callable tools."""

__version__ = "0.1.0"
