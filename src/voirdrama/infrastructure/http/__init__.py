from .fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HttpxFetcher

__all__ = ["DEFAULT_TIMEOUT", "DEFAULT_USER_AGENT", "HttpxFetcher"]
