"""Server bootstrap for the gh-dir-diff MCP service.

Creates the FastMCP instance, builds one session and GitHub client, wires
them into the tools and starts the MCP server (stdio transport).
"""

import logging

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import GITHUB_TIMEOUT, HTTP_VERIFY, LOG_LEVEL
from core.session import Session

from tools.auth import register as register_auth
from tools.compare_refs import register as register_compare_refs
from tools.share_link import register as register_share_link

log = logging.getLogger(__name__)

mcp = FastMCP("gh-dir-diff")


def register_tools() -> None:
    session = Session.from_env()
    github_client = GitHubClient(timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY, session=session)

    register_compare_refs(mcp, github_client=github_client, session=session)
    register_share_link(mcp)
    register_auth(mcp, github_client=github_client, session=session)


register_tools()


def main() -> None:
    # stdout carries the MCP protocol; logging.basicConfig writes to stderr.
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log.info("Starting gh-dir-diff MCP server (stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
