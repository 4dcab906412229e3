"""
Shared test fixtures and utilities for the cmdtree test suite.
"""

import pytest

from cmdtree.rules import CmdLineRules, CommandQuantifier, CommandRule, OptionRule


@pytest.fixture
def build_rules() -> CmdLineRules:
    """Grammar with one required 'build' command and a top-level verbose flag.

    Usage:
        tool [--verbose] build --target=<value> [--jobs=<value>]
    """
    return CmdLineRules(
        commands=[
            CommandRule(
                "build",
                CommandQuantifier.ONE,
                options=[
                    OptionRule("target", required=True, expects_value=True),
                    OptionRule("jobs", expects_value=True, aliases=("j",)),
                ],
            )
        ],
        options=[OptionRule("verbose", aliases=("v",))],
    )


@pytest.fixture
def nested_rules() -> CmdLineRules:
    """Grammar for a two-level CLI: tool remote add|remove <options>."""
    return CmdLineRules(
        command_quantifier=CommandQuantifier.ONE,
        commands=[
            CommandRule(
                "remote",
                CommandQuantifier.ONE,
                command_quantifier=CommandQuantifier.ONE,
                commands=[
                    CommandRule(
                        "add",
                        options=[
                            OptionRule("name", required=True, expects_value=True),
                            OptionRule("tag", expects_value=True, repeatable=True),
                        ],
                    ),
                    CommandRule("remove", options=[OptionRule("force")]),
                ],
            )
        ],
    )
