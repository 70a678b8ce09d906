from collectors.base import FeedFetcher, FetchError
from collectors.truthsocial import TruthSocialFetcher

__all__ = [
    "FeedFetcher",
    "FetchError",
    "TruthSocialFetcher",
]
