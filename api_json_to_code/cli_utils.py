"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

COMMAND_NAME = "api_json_to_code"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context
        return COMMAND_NAME

    if not cli_args:
        return COMMAND_NAME

    cmd_parts = [COMMAND_NAME]
    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if not value:
            continue

        if isinstance(param, click.Argument):
            # File paths shown by name only, keeping the output free of machine-specific paths
            arguments.append(Path(str(value)).name)
            continue

        if not isinstance(param, click.Option) or value == param.default:
            continue

        flag = param.opts[0] if param.opts else f"--{param_name}"
        if param.is_flag:
            options.append(flag)
        elif isinstance(value, (tuple, list)):
            for item in value:
                options.extend([flag, str(item)])
        elif isinstance(value, (str, Path)) and Path(str(value)).exists():
            options.extend([flag, Path(str(value)).name])
        else:
            options.extend([flag, str(value)])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)
