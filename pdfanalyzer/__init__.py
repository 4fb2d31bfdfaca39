"""pdfanalyzer: analyze local PDF documents with Gemini models over MCP."""

__version__ = "1.0.0"
