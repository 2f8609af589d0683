#!/usr/bin/env python3
"""
Main entry point for the Marketplace Command Agent.

Interprets a single command from the command line, or serves the HTTP API
when started with ``--serve``.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Optional

from config.settings import Settings, initialize_settings
from marketplace_agent.agents import CommandAgent
from marketplace_agent.models import AgentResponse


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Setup logging configuration."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def run_command(prompt: str, context: Any, settings: Settings, output_path: Optional[str] = None) -> AgentResponse:
    """
    Interpret one command and optionally save the response body.

    Args:
        prompt: Command text
        context: Optional pass-through context
        settings: Configuration settings
        output_path: Path for the JSON response, if any

    Returns:
        The agent response
    """
    logger = logging.getLogger(__name__)

    agent = CommandAgent(settings.to_dict())
    response = agent.process_command(prompt, context)

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(response.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Response saved to {output_path}")

    return response


def serve(settings: Settings, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from marketplace_agent.api import create_app

    config = uvicorn.Config(
        create_app(settings),
        host=host or settings.api.host,
        port=port or settings.api.port,
        log_level=settings.log_level.lower(),
    )
    uvicorn.Server(config).run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Marketplace Command Agent",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--prompt", "-p",
        help="Command to interpret, e.g. \"list a red kurti on amazon\""
    )
    mode.add_argument(
        "--serve",
        action="store_true",
        help="Serve the HTTP API instead of interpreting a single command"
    )

    parser.add_argument(
        "--context",
        help="JSON context passed through to catalog requests"
    )

    parser.add_argument(
        "--output", "-o",
        help="Path for the response JSON file"
    )

    parser.add_argument(
        "--config", "-c",
        default="config/default.yaml",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides the configuration file)"
    )

    parser.add_argument("--host", help="API host when serving")
    parser.add_argument("--port", type=int, help="API port when serving")

    return parser


def main(argv=None):
    """Main entry point for the command-line interface."""
    args = build_parser().parse_args(argv)

    # Load settings
    settings = initialize_settings(args.config)
    if args.log_level:
        settings.log_level = args.log_level

    # Setup logging
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)

    if args.serve:
        serve(settings, args.host, args.port)
        return 0

    context = None
    if args.context:
        try:
            context = json.loads(args.context)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid --context JSON: {e}")
            return 1

    response = run_command(args.prompt, context, settings, args.output)

    # Print summary
    print("\n" + "="*50)
    print(f"RESPONSE: {response.type.value.upper()}")
    print("="*50)
    print(response.message)
    if response.summary:
        print(f"Summary: {response.summary}")
    if response.payload:
        print(json.dumps(response.to_dict()['payload'], indent=2, ensure_ascii=False))
    print("="*50)

    return 1 if response.is_error else 0


if __name__ == "__main__":
    exit(main())
