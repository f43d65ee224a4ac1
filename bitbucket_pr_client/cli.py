"""CLI commands for the Bitbucket pull request client."""

import argparse
import json
import logging
import sys

from .models import BuildState


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Read and annotate Bitbucket pull requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--owner", default=None, help="Repository owner (default: BITBUCKET_OWNER)")
    parser.add_argument(
        "--repository",
        default=None,
        help="Repository name (default: BITBUCKET_REPOSITORY)",
    )
    parser.add_argument("--key", default=None, help="Build status key (default: BITBUCKET_KEY)")
    parser.add_argument(
        "--name",
        default=None,
        help="Build status reporter name (default: BITBUCKET_NAME)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("pull-requests", help="List open pull requests")

    comments_parser = subparsers.add_parser("comments", help="List comments on a pull request")
    comments_parser.add_argument("pull_request_id")

    comment_parser = subparsers.add_parser("comment", help="Post a comment on a pull request")
    comment_parser.add_argument("pull_request_id")
    comment_parser.add_argument("content")

    update_parser = subparsers.add_parser("update-comment", help="Replace a comment's content")
    update_parser.add_argument("pull_request_id")
    update_parser.add_argument("comment_id")
    update_parser.add_argument("content")

    delete_parser = subparsers.add_parser("delete-comment", help="Delete a comment")
    delete_parser.add_argument("pull_request_id")
    delete_parser.add_argument("comment_id")

    approve_parser = subparsers.add_parser("approve", help="Approve a pull request")
    approve_parser.add_argument("pull_request_id")
    approve_parser.add_argument(
        "--delete",
        action="store_true",
        help="Withdraw the approval instead",
    )

    status_parser = subparsers.add_parser(
        "build-status",
        help="Check whether a build status exists for a revision",
    )
    status_parser.add_argument("revision")
    status_parser.add_argument("key_ex", help="Key extension, e.g. the source branch")

    set_status_parser = subparsers.add_parser("set-build-status", help="Set a build status on a revision")
    set_status_parser.add_argument("revision")
    set_status_parser.add_argument("key_ex", help="Key extension, e.g. the source branch")
    set_status_parser.add_argument("state", choices=[s.value for s in BuildState])
    set_status_parser.add_argument("url", help="Link to the build")
    set_status_parser.add_argument("--description", default="", help="Status description")

    key_parser = subparsers.add_parser("build-status-key", help="Print the computed build status key")
    key_parser.add_argument("key_ex")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    from .api_client import ApiClient
    from .settings import get_settings

    settings = get_settings()
    if args.command == "build-status-key":
        from .keys import compute_api_key

        json.dump(compute_api_key(args.key or settings.key, args.key_ex), sys.stdout)
        sys.stdout.write("\n")
        return

    if not settings.username or not settings.password:
        parser.error("BITBUCKET_USERNAME and BITBUCKET_PASSWORD must be set")
    owner = args.owner or settings.owner
    repository = args.repository or settings.repository
    if not owner or not repository:
        parser.error("--owner and --repository (or BITBUCKET_OWNER/BITBUCKET_REPOSITORY) are required")

    client = ApiClient(
        settings.username,
        settings.password,
        owner,
        repository,
        args.key or settings.key,
        args.name or settings.name,
    )

    if args.command == "pull-requests":
        result = [pr.model_dump(mode="json") for pr in client.get_pull_requests()]
    elif args.command == "comments":
        result = [c.model_dump(mode="json") for c in client.get_pull_request_comments(args.pull_request_id)]
    elif args.command == "comment":
        comment = client.post_pull_request_comment(args.pull_request_id, args.content)
        result = comment.model_dump(mode="json") if comment is not None else None
    elif args.command == "update-comment":
        client.update_pull_request_comment(args.pull_request_id, args.content, args.comment_id)
        result = None
    elif args.command == "delete-comment":
        client.delete_pull_request_comment(args.pull_request_id, args.comment_id)
        result = None
    elif args.command == "approve":
        if args.delete:
            client.delete_pull_request_approval(args.pull_request_id)
            result = None
        else:
            participant = client.post_pull_request_approval(args.pull_request_id)
            result = participant.model_dump(mode="json") if participant is not None else None
    elif args.command == "build-status":
        result = client.has_build_status(owner, repository, args.revision, args.key_ex)
    else:
        client.set_build_status(
            owner,
            repository,
            args.revision,
            BuildState(args.state),
            args.url,
            args.description,
            args.key_ex,
        )
        result = None

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
