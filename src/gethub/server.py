"""MCP server implementation."""
import asyncio
import json
from typing import Any, Callable, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server import stdio

from gethub.classify.heuristics import infer
from gethub.constants import ALL_FILTER, LATEST_VERSION
from gethub.errors import GetHubError, log_error
from gethub.github.client import GitHubReleaseSource
from gethub.github.repository import parse_repository
from gethub.logging import configure_logging, get_logger
from gethub.platforms import (
    detect_platform,
    detect_platform_from_user_agent,
    format_platform,
)
from gethub.types import PlatformGuess, parse_architecture, parse_os
from gethub.view import Selection, load_view, view_to_dict

logger = get_logger("server")

SERVER_NAME = "gethub"
SERVER_VERSION = "0.1.0"

tools = [
    types.Tool(
        name="gethub_find_downloads",
        description=(
            "Find the release downloads of a GitHub repository that match the user's "
            "platform, using the repository's gethub.json rules or filename detection"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "repository": {
                    "type": "string",
                    "description": "GitHub repository URL or owner/repo",
                },
                "version": {
                    "type": "string",
                    "description": "Release tag, or 'latest' (default)",
                },
                "os": {
                    "type": "string",
                    "description": "Only show assets for this OS (windows, linux, osx, android), or 'all'",
                },
                "tag": {
                    "type": "string",
                    "description": "Only show assets carrying this tag, or 'all'",
                },
                "token": {
                    "type": "string",
                    "description": "GitHub token to raise the API rate limit",
                },
                "platform_os": {
                    "type": "string",
                    "description": "User OS; detected when omitted",
                },
                "platform_arch": {
                    "type": "string",
                    "description": "User architecture (x86, x64, arm, arm64); detected when omitted",
                },
                "user_agent": {
                    "type": "string",
                    "description": "Browser User-Agent to detect the user's platform from",
                },
            },
            "required": ["repository"],
        },
    ),
    types.Tool(
        name="gethub_classify_asset",
        description="Detect OS, architecture and tags from a release asset filename",
        inputSchema={
            "type": "object",
            "properties": {
                "filename": {"type": "string", "description": "Asset filename"}
            },
            "required": ["filename"],
        },
    ),
    types.Tool(
        name="gethub_rate_limit",
        description="Show the remaining GitHub API quota",
        inputSchema={
            "type": "object",
            "properties": {
                "token": {"type": "string", "description": "GitHub token"}
            },
        },
    ),
]


def resolve_platform(arguments: Dict[str, Any]) -> PlatformGuess:
    """User platform from explicit arguments, a User-Agent, or this host."""
    if arguments.get("user_agent"):
        guess = detect_platform_from_user_agent(arguments["user_agent"])
    else:
        guess = detect_platform()

    if "platform_os" in arguments or "platform_arch" in arguments:
        guess = PlatformGuess(
            os=parse_os(arguments["platform_os"]) if "platform_os" in arguments else guess.os,
            arch=parse_architecture(arguments["platform_arch"]) if "platform_arch" in arguments else guess.arch,
        )
    return guess


def _result(data: Any) -> List[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps({"success": True, "data": data}))]


def _failure(error: Exception) -> List[types.TextContent]:
    payload = {
        "success": False,
        "error": str(error),
        "error_type": error.__class__.__name__,
    }
    if isinstance(error, GetHubError):
        payload["code"] = error.code
        payload["details"] = error.details
        payload["retryable"] = error.retryable
    return [types.TextContent(type="text", text=json.dumps(payload))]


async def handle_tool_call(
    name: str,
    arguments: Dict[str, Any],
    source_factory: Callable[[Optional[str]], GitHubReleaseSource] = GitHubReleaseSource,
) -> List[types.TextContent]:
    """Dispatch one tool call and render its JSON result."""
    try:
        if name == "gethub_find_downloads":
            owner, repo = parse_repository(arguments["repository"])
            selection = Selection(
                version=arguments.get("version") or LATEST_VERSION,
                os_filter=arguments.get("os") or ALL_FILTER,
                tag_filter=arguments.get("tag") or ALL_FILTER,
            )
            platform = resolve_platform(arguments)
            logger.debug(f"Finding downloads for {owner}/{repo} on {format_platform(platform.os, platform.arch)}")
            view = await load_view(source_factory(arguments.get("token")), owner, repo, platform, selection)
            return _result(view_to_dict(view))

        elif name == "gethub_classify_asset":
            result = infer(arguments["filename"])
            return _result({
                "filename": arguments["filename"],
                "os": result.os.value if result.os else None,
                "arch": result.arch.value if result.arch else None,
                "tags": list(result.tags),
            })

        elif name == "gethub_rate_limit":
            rate = await source_factory(arguments.get("token")).get_rate_limit()
            if rate is None:
                return [types.TextContent(type="text", text=json.dumps({
                    "success": False,
                    "error": "Rate limit information unavailable"
                }))]
            return _result({
                "limit": rate.limit,
                "remaining": rate.remaining,
                "reset": rate.reset,
                "used": rate.used,
            })

        return [types.TextContent(type="text", text=json.dumps({
            "success": False,
            "error": f"Unknown tool: {name}"
        }))]

    except GetHubError as e:
        log_error(e, context={"tool": name}, logger=logger)
        return _failure(e)
    except KeyError as e:
        return _failure(ValueError(f"Missing required argument: {e.args[0]}"))
    except Exception as e:
        log_error(e, context={"tool": name}, logger=logger)
        return _failure(e)


async def init_server() -> Server:
    logger.info(f"Registered tools: {', '.join(t.name for t in tools)}")

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("Tools requested")
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        logger.debug(f"Tool call received: {name} with arguments {sorted(arguments or {})}")
        return await handle_tool_call(name, arguments or {})

    return server


async def serve() -> None:
    configure_logging()
    logger.info("Starting GetHub MCP server")
    server = await init_server()
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
