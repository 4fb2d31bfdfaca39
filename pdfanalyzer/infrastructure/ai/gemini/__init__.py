"""Adapters for the Gemini multimodal and OpenAI-compatible chat endpoints."""
