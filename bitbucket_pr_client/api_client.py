"""Bitbucket pull request API client.

Reads pull requests and comments, and writes build status, approvals and
comments. The 1.0 API is used for comments, the 2.0 API for everything else.
"""

import logging

from .keys import compute_api_key
from .models import (
    BuildState,
    ClientIdentity,
    Comment,
    Credentials,
    Participant,
    Pullrequest,
    PullrequestResponse,
)
from .parsing import ResponseParseError, parse
from .transport import HttpClientFactory, Transport

logger = logging.getLogger(__name__)

V1_API_BASE_URL = "https://bitbucket.org/api/1.0/repositories/"
V2_API_BASE_URL = "https://bitbucket.org/api/2.0/repositories/"


def v1(owner: str, repository_name: str, path: str) -> str:
    # Path segments are not escaped; callers pass literal ids and revisions
    return V1_API_BASE_URL + owner + "/" + repository_name + path


def v2(owner: str, repository_name: str, path: str) -> str:
    return V2_API_BASE_URL + owner + "/" + repository_name + path


class ApiClient:
    """Client for one repository, authenticating as one user.

    Network failures never raise: reads come back empty and writes are
    best effort.
    """

    def __init__(
        self,
        username: str,
        password: str,
        owner: str,
        repository_name: str,
        key: str,
        name: str,
        http_factory: HttpClientFactory | None = None,
    ):
        self.identity = ClientIdentity(owner, repository_name, key, name)
        self.transport = Transport(
            Credentials(username, password),
            http_factory or HttpClientFactory.INSTANCE,
        )

    @property
    def owner(self) -> str:
        return self.identity.owner

    @property
    def repository_name(self) -> str:
        return self.identity.repository_name

    @property
    def key(self) -> str:
        return self.identity.key

    @property
    def name(self) -> str:
        """Reporter name shown on build statuses."""
        return self.identity.name

    def build_status_key(self, key_ex: str) -> str:
        return compute_api_key(self.key, key_ex)

    def get_pull_requests(self) -> list[Pullrequest]:
        try:
            body = self.transport.get(self._v2("/pullrequests/"))
            return self._parse(body, PullrequestResponse).pullrequests
        except ResponseParseError:
            logger.warning("invalid pull request response.", exc_info=True)
        return []

    def get_pull_request_comments(
        self,
        pull_request_id: str,
        owner: str | None = None,
        repository_name: str | None = None,
    ) -> list[Comment]:
        """List comments on a pull request.

        ``owner`` and ``repository_name`` select another repository, such as
        the fork a pull request comes from. Both default to this client's
        repository.
        """
        url = v1(
            owner or self.owner,
            repository_name or self.repository_name,
            f"/pullrequests/{pull_request_id}/comments",
        )
        try:
            return self._parse(self.transport.get(url), list[Comment])
        except ResponseParseError:
            logger.warning("invalid pull request comments response.", exc_info=True)
        return []

    def has_build_status(self, owner: str, repository_name: str, revision: str, key_ex: str) -> bool:
        url = v2(
            owner,
            repository_name,
            f"/commit/{revision}/statuses/build/{self.build_status_key(key_ex)}",
        )
        body = self.transport.get(url)
        return body is not None and '"state"' in body

    def set_build_status(
        self,
        owner: str,
        repository_name: str,
        revision: str,
        state: BuildState,
        build_url: str,
        comment: str,
        key_ex: str,
    ) -> None:
        url = v2(owner, repository_name, f"/commit/{revision}/statuses/build")
        computed_key = self.build_status_key(key_ex)
        data = {
            "description": comment,
            "key": computed_key,
            "name": self.name,
            "state": str(state),
            "url": build_url,
        }
        response = self.transport.post(url, data)
        logger.info(
            "POST state %s to %s with key %s with response %s",
            state,
            url,
            computed_key,
            response,
        )

    def delete_pull_request_approval(self, pull_request_id: str) -> None:
        self.transport.delete(self._v2(f"/pullrequests/{pull_request_id}/approve"))

    def delete_pull_request_comment(self, pull_request_id: str, comment_id: str) -> None:
        self.transport.delete(self._v1(f"/pullrequests/{pull_request_id}/comments/{comment_id}"))

    def update_pull_request_comment(self, pull_request_id: str, content: str, comment_id: str) -> None:
        self.transport.put(
            self._v1(f"/pullrequests/{pull_request_id}/comments/{comment_id}"),
            {"content": content},
        )

    def post_pull_request_approval(self, pull_request_id: str) -> Participant | None:
        body = self.transport.post(self._v2(f"/pullrequests/{pull_request_id}/approve"), {})
        try:
            return self._parse(body, Participant)
        except ResponseParseError:
            logger.warning("Invalid pull request approval response.", exc_info=True)
        return None

    def post_pull_request_comment(self, pull_request_id: str, content: str) -> Comment | None:
        body = self.transport.post(
            self._v1(f"/pullrequests/{pull_request_id}/comments"),
            {"content": content},
        )
        try:
            return self._parse(body, Comment)
        except ResponseParseError:
            logger.warning("Invalid pull request comment response.", exc_info=True)
        return None

    def _v1(self, path: str) -> str:
        return v1(self.owner, self.repository_name, path)

    def _v2(self, path: str) -> str:
        return v2(self.owner, self.repository_name, path)

    def _parse(self, body, shape):
        return parse(body, shape, self.repository_name)
