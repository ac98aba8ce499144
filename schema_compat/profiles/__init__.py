"""Compat layers for specific model providers."""

from .anthropic import AnthropicSchemaCompatLayer
from .google import GoogleSchemaCompatLayer
from .openai import OpenAIReasoningSchemaCompatLayer, OpenAISchemaCompatLayer

__all__ = [
    "AnthropicSchemaCompatLayer",
    "GoogleSchemaCompatLayer",
    "OpenAIReasoningSchemaCompatLayer",
    "OpenAISchemaCompatLayer",
]
