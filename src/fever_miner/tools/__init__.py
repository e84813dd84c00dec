"""Tool implementations

External process adapters used by the extraction pipeline.
"""

from .tool import Tool
from .tool_result import ToolResult
from .execute_command_tool import ExecuteCommandTool
from .feature_location_tool import FeatureLocationScannerTool
from .config_dumper_tool import ConfigModelDumperTool
from .tool_executor import ToolExecutor, ToolGenerator

__all__ = [
    "Tool",
    "ToolResult",
    "ExecuteCommandTool",
    "FeatureLocationScannerTool",
    "ConfigModelDumperTool",
    "ToolExecutor",
    "ToolGenerator",
]
