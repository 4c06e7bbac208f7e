"""Embed resolvers: unwrap hoster embed pages into playable URLs."""

from .chain import StreamResolutionChain
from .vidmoly import VidmolyResolver, is_vidmoly_url

__all__ = ["StreamResolutionChain", "VidmolyResolver", "is_vidmoly_url"]
