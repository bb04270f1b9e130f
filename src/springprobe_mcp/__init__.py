"""MCP server exposing springprobe operations as tools."""
