#!/usr/bin/env python3
"""Main entry point for Swarm Thing.

Starts an interactive agent in --workdir: loads .env and the configuration,
loads every stored tool (fatal on a compile error), optionally starts an IPC
listener, then reads prompts until 'exit'. Tool and network failures are
printed and never end the loop.
"""

import asyncio
import os
import sys
from argparse import ArgumentParser
from pathlib import Path

PROMPT = "> "


def parse_args(argv=None):
    parser = ArgumentParser(description="Run a Swarm Thing agent")
    parser.add_argument(
        "--workdir",
        default=".",
        help="Working directory (tools/, .env and .swarmthing/ live here)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Start an IPC listener on this port before the prompt",
    )
    parser.add_argument(
        "--log-format",
        choices=["pretty", "json"],
        help="Log format (pretty or json). Overrides config and LOG_FORMAT env var.",
    )
    parser.add_argument(
        "--log-colors",
        type=lambda x: x.lower() in ("true", "1", "yes", "on"),
        help="Enable colored logs (true/false). Overrides LOG_COLORS env var.",
    )
    return parser.parse_args(argv)


def print_outcomes(outcomes) -> None:
    for outcome in outcomes:
        if outcome.kind == "create":
            label = "Tool created" if outcome.ok else "Error creating tool"
        else:
            label = "Tool output" if outcome.ok else "Tool error"
        marker = "✓" if outcome.ok else "✗"
        print(f"{marker} {label} [{outcome.name}]: {outcome.text}")


def main(argv=None) -> int:
    args = parse_args(argv)

    # Logging env must be in place before the logger module is imported
    if args.log_format:
        os.environ["LOG_FORMAT"] = args.log_format
    if args.log_colors is not None:
        os.environ["LOG_COLORS"] = "true" if args.log_colors else "false"

    from swarmthing.utils.logger import get_logger, set_log_level

    startup_logger = get_logger("swarmthing.startup")

    workdir_path = Path(args.workdir).expanduser().resolve()
    if not workdir_path.is_dir():
        startup_logger.error("--workdir is not a directory", path=str(workdir_path))
        return 1
    os.chdir(workdir_path)

    from dotenv import load_dotenv

    env_file = workdir_path / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=env_file, override=False)
        startup_logger.debug("Loaded .env file", path=str(env_file))

    from swarmthing.config import (
        ConfigValidationError,
        create_config_manager,
        get_default_config,
        settings,
    )
    from swarmthing.config.constants import DEFAULT_STATE_DIRNAME

    try:
        config_manager = create_config_manager(
            workdir_path / DEFAULT_STATE_DIRNAME, defaults=get_default_config()
        )
        asyncio.run(config_manager.initialize())
        settings.bind(config_manager)
    except (ConfigValidationError, OSError) as e:
        startup_logger.error("Failed to initialize configuration", error=str(e))
        return 1

    valid, errors = settings.validation_status()
    if not valid:
        startup_logger.error("Invalid configuration", errors=errors)
        return 1
    set_log_level(settings.log_level)

    from swarmthing.errors import CompileError, ToolStoreError
    from swarmthing.tools.tool_manager import ToolManager

    try:
        manager = ToolManager()
        loaded = manager.load_tools()
    except (CompileError, ToolStoreError) as e:
        startup_logger.error("Failed to load tools", error=str(e))
        return 1
    print(f"Loaded {len(loaded)} tools: {', '.join(loaded)}")

    if args.port:
        manager.start_listener(args.port)

    from swarmthing.agents.agent import Agent
    from swarmthing.agents.llm import create_default_backend

    try:
        backend = create_default_backend()
    except ValueError as e:
        startup_logger.error("Chat backend not available", error=str(e))
        return 1

    agent = Agent(backend, manager)
    print("Ready! Type 'exit' to quit.")

    while True:
        try:
            user_input = input(PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not user_input:
            continue
        if user_input.lower() == "exit":
            break

        try:
            reply = agent.chat(user_input)
            print(reply)
            print_outcomes(agent.apply(reply))
        except Exception as e:
            startup_logger.error("Chat turn failed", error=str(e))
            print(f"✗ Error: {e}")

    manager.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
