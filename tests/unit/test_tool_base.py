"""Tests for base tool framework and registry."""

import pytest

from anchoredit.core.config import EngineConfig
from anchoredit.core.exceptions import E_DEGENERATE, E_TOOL_UNKNOWN, DegenerateInputError
from anchoredit.core.logger import AnchorEditLogger
from anchoredit.core.tool_protocol import ToolCall, ToolDefinition, ToolResult
from anchoredit.core.workspace import Workspace
from anchoredit.tools import SnippetEditTool
from anchoredit.tools.base import BaseTool, ToolContext, ToolRegistry


class MockTool(BaseTool):
    """Mock tool for testing."""

    def __init__(self, name: str = "mock_tool", failure: Exception | None = None):
        self.name = name
        self.failure = failure
        self.execution_count = 0

    async def execute(self, call: ToolCall, context: ToolContext) -> ToolResult:
        self.execution_count += 1
        if self.failure:
            raise self.failure
        return ToolResult(success=True, output=f"Executed {call.name} with args: {call.arguments}")

    def get_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description="A mock tool for testing",
            parameters={
                "type": "object",
                "properties": {"arg": {"type": "string"}},
                "required": [],
            },
        )


@pytest.fixture
def tool_context(tmp_path):
    return ToolContext(
        workspace=Workspace(str(tmp_path / "ws")),
        logger=AnchorEditLogger(log_dir=str(tmp_path / "logs")),
    )


class TestToolContext:
    def test_default_config(self, tool_context):
        assert tool_context.config == EngineConfig()


class TestBaseTool:
    def test_get_name_and_description(self):
        tool = MockTool(name="test_tool")
        assert tool.get_name() == "test_tool"
        assert tool.get_description() == "A mock tool for testing"

    def test_abstract_class_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            BaseTool()


class TestToolRegistry:
    def test_register_and_lookup(self, tool_context):
        registry = ToolRegistry(tool_context)
        tool = MockTool()
        registry.register(tool)

        assert registry.has("mock_tool")
        assert registry.get("mock_tool") is tool
        assert registry.get("missing") is None
        assert registry.list_tools() == ["mock_tool"]

    def test_register_duplicate_tool_fails(self, tool_context):
        registry = ToolRegistry(tool_context)
        registry.register(MockTool())
        with pytest.raises(ValueError, match="Tool already registered: mock_tool"):
            registry.register(MockTool())

    @pytest.mark.asyncio
    async def test_execute_tool(self, tool_context):
        registry = ToolRegistry(tool_context)
        tool = MockTool()
        registry.register(tool)

        result = await registry.execute(ToolCall(id="1", name="mock_tool", arguments={"arg": "x"}))

        assert result.success is True
        assert tool.execution_count == 1

    @pytest.mark.asyncio
    async def test_execute_unknown_tool(self, tool_context):
        registry = ToolRegistry(tool_context)
        registry.register(MockTool())
        result = await registry.execute(ToolCall(id="1", name="nope", arguments={}))

        assert result.success is False
        assert result.error_code == E_TOOL_UNKNOWN
        assert result.error == "Unknown tool: nope. Available: mock_tool"

    @pytest.mark.asyncio
    async def test_anchoredit_exception_becomes_result(self, tool_context):
        registry = ToolRegistry(tool_context)
        registry.register(MockTool(failure=DegenerateInputError("empty", argument="snippet")))

        result = await registry.execute(ToolCall(id="1", name="mock_tool", arguments={}))

        assert result.success is False
        assert result.error_code == E_DEGENERATE
        assert "Tool mock_tool failed: empty" in result.error

    @pytest.mark.asyncio
    async def test_unexpected_exception_propagates(self, tool_context):
        registry = ToolRegistry(tool_context)
        registry.register(MockTool(failure=RuntimeError("boom")))

        with pytest.raises(RuntimeError, match="boom"):
            await registry.execute(ToolCall(id="1", name="mock_tool", arguments={}))

    def test_get_definitions(self, tool_context):
        registry = ToolRegistry(tool_context)
        registry.register(MockTool())
        registry.register(SnippetEditTool())

        names = [d.name for d in registry.get_definitions()]
        assert names == ["mock_tool", "replace_snippet"]

    def test_register_rejects_invalid_schema(self, tool_context):
        registry = ToolRegistry(tool_context)
        tool = MockTool(name="broken")
        tool.get_definition = lambda: ToolDefinition(
            name="broken",
            description="Requires an undeclared argument",
            parameters={"type": "object", "properties": {}, "required": ["path"]},
        )

        with pytest.raises(ValueError, match="Invalid parameter schema for tool: broken"):
            registry.register(tool)
        assert not registry.has("broken")

    @pytest.mark.asyncio
    async def test_snippet_edit_through_registry(self, tool_context):
        target = tool_context.workspace.root_path / "notes.txt"
        target.write_text("a frog in a nice world\n")

        registry = ToolRegistry(tool_context)
        registry.register(SnippetEditTool())
        result = await registry.execute(
            ToolCall(
                id="1",
                name="replace_snippet",
                arguments={
                    "file_path": "notes.txt",
                    "snippet": "nice world",
                    "replacement": "beautiful world",
                },
            )
        )

        assert result.success is True
        assert target.read_text() == "a frog in a beautiful world\n"
