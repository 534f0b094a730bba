"""
Agentic system package.

Hosts the two model-driven pipelines: the RAG conversational agent and the
hierarchical map-reduce summarizer.

System role: Pipeline package root
"""
