"""
Core business logic.

Chunking, retrieval, the conversational agent and the summarizer. Nothing
in this package constructs its own external clients.
"""
