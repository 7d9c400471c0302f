"""Base tool framework and registry.

Defines the abstract interface for tools and the registry that dispatches
tool calls to them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from anchoredit.core.config import EngineConfig
from anchoredit.core.exceptions import E_TOOL_UNKNOWN, E_VALIDATION, AnchorEditException
from anchoredit.core.logger import AnchorEditLogger
from anchoredit.core.tool_protocol import (
    ToolCall,
    ToolDefinition,
    ToolResult,
    validate_tool_schema,
)
from anchoredit.core.workspace import Workspace


@dataclass
class ToolContext:
    """Context provided to tools during execution."""

    workspace: Workspace
    logger: AnchorEditLogger
    config: EngineConfig = field(default_factory=EngineConfig)


class BaseTool(ABC):
    """Abstract base class for all tools.

    To create a new tool:
    1. Subclass BaseTool
    2. Implement execute() method
    3. Implement get_definition() to return ToolDefinition
    4. Register with ToolRegistry
    """

    @abstractmethod
    async def execute(self, call: ToolCall, context: ToolContext) -> ToolResult:
        """Execute the tool with given arguments.

        Args:
            call: Tool call with name and arguments
            context: Execution context (workspace, logger, config)

        Returns:
            ToolResult with success status and output/error
        """
        raise NotImplementedError

    @abstractmethod
    def get_definition(self) -> ToolDefinition:
        """Get the tool's definition.

        Returns:
            ToolDefinition with name, description, and JSON Schema
        """
        raise NotImplementedError

    def get_name(self) -> str:
        return self.get_definition().name

    def get_description(self) -> str:
        return self.get_definition().description


class ToolRegistry:
    """Registry for managing and executing tools."""

    def __init__(self, context: ToolContext) -> None:
        self.context = context
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool.

        Raises:
            ValueError: If tool with same name already registered, or its
                parameter schema is invalid
        """
        definition = tool.get_definition()
        name = definition.name
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        if not validate_tool_schema(definition):
            raise ValueError(f"Invalid parameter schema for tool: {name}")

        self._tools[name] = tool
        self.context.logger.debug("Tool registered", tool_name=name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> BaseTool | None:
        return self._tools.get(name)

    async def execute(self, call: ToolCall) -> ToolResult:
        """Execute a tool call.

        Unknown tools and anchoredit exceptions escaping a tool are reported
        as failed results; any other exception propagates.

        Args:
            call: Tool call to execute

        Returns:
            ToolResult from tool execution
        """
        if not self.has(call.name):
            self.context.logger.warn("Unknown tool requested", tool_name=call.name)
            return ToolResult(
                success=False,
                error=f"Unknown tool: {call.name}. Available: {', '.join(self.list_tools())}",
                error_code=E_TOOL_UNKNOWN,
            )

        tool = self._tools[call.name]

        try:
            self.context.logger.debug("Executing tool", tool_name=call.name)
            result = await tool.execute(call, self.context)
        except AnchorEditException as e:
            self.context.logger.failure(
                "Tool execution failed", e, level=logging.ERROR, tool_name=call.name
            )
            return ToolResult(
                success=False,
                error=f"Tool {call.name} failed: {e}",
                error_code=e.error_code or E_VALIDATION,
            )

        self.context.logger.info("Tool executed", tool_name=call.name, success=result.success)
        return result

    def get_definitions(self) -> list[ToolDefinition]:
        return [tool.get_definition() for tool in self._tools.values()]

    def list_tools(self) -> list[str]:
        return list(self._tools.keys())
