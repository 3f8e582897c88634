import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .errors import ApiGenerationError
from .pipeline import CodeGeneratorConfig, OutputMode, PipelineGenerator


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--interface", "-i", "interfaces", multiple=True, help="Generate only these interfaces (repeatable)")
@click.option("--language", "-l", default="java", type=click.Choice(["java"]))
@click.option("--force", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every synthesized type")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def api_json_to_code(config, interfaces, language, force, verbose, path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    with open(path) as f:
        api = json.load(f)

    try:
        if config is not None:
            with open(config) as f:
                config = CodeGeneratorConfig.from_dict(json.load(f))
        else:
            config = CodeGeneratorConfig()

        # CLI flag overrides the config file
        if force:
            config.output.mode = OutputMode.FORCE

        generation_comment = f"// Generated by: {reconstruct_command_line(api_json_to_code)}"
        codegen = PipelineGenerator(api, config, language, generation_comment)
        written = codegen.write(output, list(interfaces) or None)
    except ApiGenerationError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {len(written)} files in {output}")
