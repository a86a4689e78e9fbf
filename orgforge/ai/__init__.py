"""AI assistant integration: tool definitions and dispatch."""
