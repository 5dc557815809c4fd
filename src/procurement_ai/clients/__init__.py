"""
Client wrappers for external services.
"""

from .openai_client import OpenAIClient

__all__ = ['OpenAIClient']
