"""Adapters for the chat platform, the moderation backend and inbound HTTP."""
