from .fetcher import fetch_github_data

__all__ = ["fetch_github_data"]
