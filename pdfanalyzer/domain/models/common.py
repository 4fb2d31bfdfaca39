"""Defines common Value Objects used across different domain contexts.

These objects represent simple values like file references, instructions and
model identifiers, ensuring consistency and type safety.
"""

from typing import NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
FileReference = NewType("FileReference", str)   # URI-like reference to a local PDF
FilePath = NewType("FilePath", str)             # Absolute, platform-native path
Instruction = NewType("Instruction", str)       # User's natural-language prompt
ModelId = NewType("ModelId", str)               # e.g. "gemini-2.0-flash"
AnswerText = NewType("AnswerText", str)         # Text produced by the remote model
DocumentText = NewType("DocumentText", str)     # Linear text extracted from a PDF
ApiKey = NewType("ApiKey", str)

# === Tool Invocation Context ===
ToolName = NewType("ToolName", str)

# === Attempt strategies ===
STRATEGY_MULTIMODAL = "multimodal"
STRATEGY_CHAT = "chat"
