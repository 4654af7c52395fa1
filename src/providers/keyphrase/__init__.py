"""Keyphrase-extraction provider implementations."""

from src.providers.keyphrase.yahoo_keyphrase_provider import YahooKeyphraseProvider

__all__ = ["YahooKeyphraseProvider"]
