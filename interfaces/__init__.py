"""Console and MCP front ends for the dispatch agent."""
