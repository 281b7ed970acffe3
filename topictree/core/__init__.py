"""Core domain models, configuration and conversation-tree helpers."""
