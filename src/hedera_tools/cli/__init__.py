"""Command-line interface for hedera-tools."""
