"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (Gemini APIs, the local file
system, PDF parsing, the console and the MCP transport) by implementing the
interfaces defined in the domain layer.
"""
