"""springprobe CLI - inspect a Spring Boot project from the shell.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

import sys
from typing import Annotated

import tyro

from springprobe.cli.commands.build import Compile, Test
from springprobe.cli.commands.env import Env
from springprobe.cli.commands.extract import (
    Claims,
    Controller,
    Entity,
    Exclusions,
    Naming,
    Properties,
    Repository,
    Service,
    Version,
    Wrapper,
)
from springprobe.cli.commands.mcp import Mcp

# Type aliases for subcommand annotations
_Claims = Annotated[Claims, tyro.conf.subcommand("claims")]
_Wrapper = Annotated[Wrapper, tyro.conf.subcommand("wrapper")]
_Entity = Annotated[Entity, tyro.conf.subcommand("entity")]
_Controller = Annotated[Controller, tyro.conf.subcommand("controller")]
_Repository = Annotated[Repository, tyro.conf.subcommand("repository")]
_Service = Annotated[Service, tyro.conf.subcommand("service")]
_Naming = Annotated[Naming, tyro.conf.subcommand("naming")]
_Properties = Annotated[Properties, tyro.conf.subcommand("properties")]
_Exclusions = Annotated[Exclusions, tyro.conf.subcommand("exclusions")]
_Version = Annotated[Version, tyro.conf.subcommand("version")]
_Compile = Annotated[Compile, tyro.conf.subcommand("compile")]
_Test = Annotated[Test, tyro.conf.subcommand("test")]
_Env = Annotated[Env, tyro.conf.subcommand("env")]
_Mcp = Annotated[Mcp, tyro.conf.subcommand("mcp")]

# Top-level commands using pipe syntax
Command = (
    _Claims
    | _Wrapper
    | _Entity
    | _Controller
    | _Repository
    | _Service
    | _Naming
    | _Properties
    | _Exclusions
    | _Version
    | _Compile
    | _Test
    | _Env
    | _Mcp
)


def main() -> int:
    """Entry point for the CLI."""
    # configure structlog (respects SPRINGPROBE_DEBUG env var)
    from springprobe.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="springprobe",
            description="Compact facts about a Spring Boot project.",
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
