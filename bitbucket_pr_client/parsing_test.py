"""Unit tests for response parsing."""

import json

import pytest
from pydantic import ValidationError

from .models import Comment, Participant, PullrequestResponse
from .parsing import ResponseParseError, parse


def describe_parse():
    def describe_single_shape():
        def it_parses_a_comment():
            body = json.dumps({"comment_id": 42, "content": "LGTM", "pull_request_id": 7})

            comment = parse(body, Comment, "repo")

            assert comment.id == 42
            assert comment.content == "LGTM"

        def it_parses_a_participant():
            body = json.dumps({
                "role": "PARTICIPANT",
                "approved": True,
                "user": {"username": "ci-bot", "display_name": "CI Bot"},
            })

            participant = parse(body, Participant)

            assert participant.approved is True
            assert participant.user.username == "ci-bot"

    def describe_generic_list():
        def it_parses_a_list_of_comments():
            body = json.dumps([
                {"comment_id": 1, "content": "first"},
                {"comment_id": 2, "content": "second"},
            ])

            comments = parse(body, list[Comment], "repo")

            assert [c.id for c in comments] == [1, 2]
            assert [c.content for c in comments] == ["first", "second"]

        def it_parses_an_empty_list():
            assert parse("[]", list[Comment]) == []

    def describe_envelope():
        def it_exposes_values_as_pullrequests():
            body = json.dumps({
                "pagelen": 10,
                "page": 1,
                "size": 1,
                "values": [{
                    "id": 5,
                    "title": "Add feature",
                    "state": "OPEN",
                    "source": {
                        "branch": {"name": "feature"},
                        "commit": {"hash": "abc123"},
                        "repository": {"full_name": "owner/repo"},
                    },
                }],
            })

            response = parse(body, PullrequestResponse, "repo")

            assert len(response.pullrequests) == 1
            pr = response.pullrequests[0]
            assert pr.id == "5"
            assert pr.source.branch.name == "feature"
            assert pr.source.commit.hash == "abc123"

        def it_defaults_to_no_pullrequests():
            assert parse("{}", PullrequestResponse).pullrequests == []

    def describe_failures():
        def it_raises_on_malformed_json():
            with pytest.raises(ResponseParseError) as excinfo:
                parse("{not json", Comment, "my-repo")

            assert excinfo.value.body == "{not json"
            assert excinfo.value.repository_name == "my-repo"
            assert isinstance(excinfo.value.__cause__, ValidationError)

        def it_raises_on_the_wrong_shape():
            with pytest.raises(ResponseParseError):
                parse(json.dumps({"comment_id": 1}), list[Comment], "repo")

        def it_raises_on_a_missing_body():
            with pytest.raises(ResponseParseError) as excinfo:
                parse(None, Comment, "repo")

            assert excinfo.value.body is None

        def it_is_a_value_error():
            with pytest.raises(ValueError):
                parse("", Participant)

        def it_logs_repository_and_raw_body(caplog):
            with pytest.raises(ResponseParseError):
                parse("<html>Bad gateway</html>", Comment, "my-repo")

            assert "Unable to parse the response." in caplog.text
            assert "repository: my-repo" in caplog.text
            assert "response: <html>Bad gateway</html>" in caplog.text
