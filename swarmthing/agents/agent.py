from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from swarmthing.agents.llm import ChatBackend
from swarmthing.agents.prompts import build_system_prompt
from swarmthing.agents.protocol import extract_tool_blocks, extract_tool_calls
from swarmthing.errors import CompileError, ToolStoreError
from swarmthing.tools.core.types import ToolError, parse_tool_result
from swarmthing.tools.tool_manager import ToolManager
from swarmthing.utils.logger import agent_logger


@dataclass(frozen=True)
class DirectiveOutcome:
    kind: Literal["create", "call"]
    name: str
    ok: bool
    text: str


class Agent:
    """One conversation with a chat backend, acting on the tool protocol."""

    def __init__(
        self,
        backend: ChatBackend,
        manager: ToolManager,
        system_prompt: str | None = None,
    ) -> None:
        self.backend = backend
        self.manager = manager
        self.system_prompt = system_prompt or build_system_prompt(
            manager.list_tools(), manager.runtime.capability_names()
        )
        self.history: list[BaseMessage] = []

    def messages(self) -> list[BaseMessage]:
        return [SystemMessage(content=self.system_prompt), *self.history]

    def chat(self, user_input: str) -> str:
        self.history.append(HumanMessage(content=user_input))
        agent_logger.info(
            "Agent turn", model=self.backend.get_model_name(), turns=len(self.history)
        )
        try:
            reply = self.backend.chat(self.messages())
        except Exception:
            # keep history consistent for the next turn
            self.history.pop()
            raise
        self.history.append(AIMessage(content=reply))
        return reply

    def apply(self, reply: str) -> list[DirectiveOutcome]:
        """Create every tool block, then run every tool call in reply."""
        outcomes: list[DirectiveOutcome] = []
        for block in extract_tool_blocks(reply):
            try:
                text = self.manager.create_tool(block.name, block.code)
            except (CompileError, ToolStoreError) as e:
                outcomes.append(DirectiveOutcome("create", block.name, False, str(e)))
            else:
                outcomes.append(DirectiveOutcome("create", block.name, True, text))

        for call in extract_tool_calls(reply):
            result = parse_tool_result(self.manager.run_tool(call.name, call.args))
            if isinstance(result, ToolError):
                agent_logger.warning(
                    "Tool call failed", tool=call.name, code=result.code
                )
                outcomes.append(DirectiveOutcome("call", call.name, False, result.error))
            else:
                outcomes.append(
                    DirectiveOutcome("call", call.name, True, str(result.output))
                )
        return outcomes
