from .client import GitHubClient
from .oauth import OAuthClient

__all__ = ["GitHubClient", "OAuthClient"]
