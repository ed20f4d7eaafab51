"""MCP stdio server exposing the Hedera tools."""
