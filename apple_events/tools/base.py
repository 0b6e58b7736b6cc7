"""Tool response envelope and the single point where failures become user text."""

from typing import Annotated, Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

from apple_events.config import get_settings
from apple_events.errors import AppleEventsError
from apple_events.observability.logging import get_logger

logger = get_logger(__name__)


class TextContent(BaseModel):
    type: Annotated[str, Field(default="text")]
    text: str


class ToolResponse(BaseModel):
    """Result returned to the tool-call dispatcher."""

    model_config = ConfigDict(populate_by_name=True)

    content: Annotated[list[TextContent], Field(description="Response content blocks")]
    is_error: Annotated[bool, Field(
        default=False, alias="isError", description="Whether the tool call failed")]

    @classmethod
    def success(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def error(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def create_error_message(operation_name: str, error: BaseException) -> str:
    """
    User-safe text for a failed operation.

    Validation and helper-reported errors are shown verbatim. Anything else
    shows its detail only in development mode.
    """
    if isinstance(error, AppleEventsError) and error.user_facing:
        return error.message

    if get_settings().is_development:
        return f"Failed to {operation_name}: {error}"
    return f"Failed to {operation_name}: System error occurred"


async def handle_async_operation(
    operation: Callable[[], Awaitable[str]],
    operation_name: str,
) -> ToolResponse:
    """Run `operation` and wrap its text, or its failure, in a ToolResponse."""
    try:
        result = await operation()
    except Exception as e:
        kind = e.kind.value if isinstance(e, AppleEventsError) else "unexpected"
        logger.info("tool_failed", operation=operation_name, kind=kind, error=str(e))
        return ToolResponse.error(create_error_message(operation_name, e))
    return ToolResponse.success(result)
