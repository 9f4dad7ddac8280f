import asyncio
import json
from datetime import datetime
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from . import __version__
from .config import BuildConfig
from .contracts import BuildConfigError
from .history import BuildHistory
from .pipeline import BuildPipeline


class ScaffoldMCPServer:
    """Exposes the build pipeline as MCP tools over stdio."""

    def __init__(self):
        self._server = Server("scaffold-build")
        self._register_handlers()

    def _register_handlers(self):
        self._server.list_tools()(self._list_tools)
        self._server.call_tool()(self._call_tool)

    async def _list_tools(self) -> list[Tool]:
        return [
            Tool(
                name="run_build",
                description=(
                    "Compile a project: read config/dependencies.json, build the classpath, "
                    "run the compiler in the source root and move compiled artifacts into "
                    "the output tree. Returns per-stage results and captured compiler output."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "project_path": {
                            "type": "string",
                            "description": "Absolute path to project root"
                        },
                        "flat": {
                            "type": "boolean",
                            "description": "Compile without manifest or classpath (default: false)"
                        },
                        "timeout": {
                            "type": "number",
                            "description": "Seconds before the compiler is killed (optional)"
                        }
                    },
                    "required": ["project_path"]
                }
            ),
            Tool(
                name="get_build_result",
                description="Get the stored result of a previous build.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "project_path": {
                            "type": "string",
                            "description": "Absolute path to project root"
                        },
                        "build_id": {
                            "type": "string",
                            "description": "Build ID returned from run_build"
                        }
                    },
                    "required": ["project_path", "build_id"]
                }
            ),
            Tool(
                name="list_recent_builds",
                description="List recent builds of a project and whether they succeeded.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "project_path": {
                            "type": "string",
                            "description": "Absolute path to project root"
                        },
                        "limit": {
                            "type": "integer",
                            "description": "Max builds to return (default: 5)"
                        }
                    },
                    "required": ["project_path"]
                }
            ),
            Tool(
                name="health_check",
                description="Check server health status.",
                inputSchema={
                    "type": "object",
                    "properties": {}
                }
            ),
        ]

    async def _call_tool(self, name: str, arguments: dict) -> list[TextContent]:
        if name == "run_build":
            return await asyncio.to_thread(self._handle_run_build, arguments)
        elif name == "get_build_result":
            return self._handle_get_build_result(arguments)
        elif name == "list_recent_builds":
            return self._handle_list_recent_builds(arguments)
        elif name == "health_check":
            return self._handle_health_check(arguments)
        else:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

    def _handle_run_build(self, arguments: dict) -> list[TextContent]:
        """Run one build and store its result."""
        project_path = Path(arguments["project_path"])
        if not project_path.exists():
            return [TextContent(type="text", text=f"Path does not exist: {project_path}")]

        try:
            config = BuildConfig.load(project_path)
        except BuildConfigError as e:
            return [TextContent(type="text", text=f"Invalid build config: {e}")]

        if arguments.get("flat"):
            config.use_manifest = False
        if arguments.get("timeout") is not None:
            try:
                config.timeout = float(arguments["timeout"])
            except (TypeError, ValueError):
                return [TextContent(type="text", text=f"Invalid timeout: {arguments['timeout']}")]

        result = BuildPipeline(config).run()
        BuildHistory(project_path).save(result)
        return [TextContent(type="text", text=json.dumps(result.to_dict(), indent=2))]

    def _handle_get_build_result(self, arguments: dict) -> list[TextContent]:
        build_id = arguments["build_id"]
        record = BuildHistory(Path(arguments["project_path"])).get(build_id)
        if not record:
            return [TextContent(type="text", text=f"Build not found: {build_id}")]
        return [TextContent(type="text", text=json.dumps(record.to_dict(), indent=2))]

    def _handle_list_recent_builds(self, arguments: dict) -> list[TextContent]:
        limit = arguments.get("limit", 5)
        records = BuildHistory(Path(arguments["project_path"])).recent(limit)

        builds = []
        for record in records:
            duration = None
            if record.completed_at and record.started_at:
                duration = (record.completed_at - record.started_at).total_seconds()
            builds.append({
                "build_id": record.build_id,
                "success": record.success,
                "started": record.started_at.isoformat(),
                "duration_seconds": duration,
            })

        return [TextContent(type="text", text=json.dumps(builds, indent=2))]

    def _handle_health_check(self, arguments: dict) -> list[TextContent]:
        """Returns server status."""
        result = {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "version": __version__
        }
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    async def run(self):
        async with stdio_server() as (read_stream, write_stream):
            await self._server.run(read_stream, write_stream, self._server.create_initialization_options())


def main():
    server = ScaffoldMCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
