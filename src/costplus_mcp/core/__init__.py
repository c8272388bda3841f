"""Core client, error, response and observability layers for costplus-mcp."""
