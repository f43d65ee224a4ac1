"""Bitbucket pull request client.

Reads pull requests and comments from Bitbucket Cloud and reports build
status, approvals and comments back to it.
"""

from .api_client import ApiClient
from .cli import main
from .keys import compute_api_key
from .models import BuildState, Comment, Participant, Pullrequest
from .parsing import ResponseParseError
from .transport import HttpClientFactory

__all__ = [
    "main",
    "ApiClient",
    "BuildState",
    "Comment",
    "HttpClientFactory",
    "Participant",
    "Pullrequest",
    "ResponseParseError",
    "compute_api_key",
]

if __name__ == "__main__":
    main()
