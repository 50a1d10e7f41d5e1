"""
Command Line Interface for EdgeOverlay.
"""
import json
import logging
import os
import click
from ..CONFIG.config_source import ConfigSource
from ..CONFIG.settings import OverlaySettings
from ..exceptions import EdgeOverlayError
from ..PARSERS.deployment_parser import DeploymentParser
from ..PROVIDERS.base_provider import DockerCombinedConfigProvider
from ..PROVIDERS.cluster_provider import ClusterCombinedConfigProvider

def _parse_overrides(values):
    """
    Turns repeated KEY=VALUE options into a dictionary.
    """
    overrides = {}
    for item in values:
        if '=' not in item:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="--config")
        key, value = item.split('=', 1)
        overrides[key.strip()] = value
    return overrides

@click.group()
@click.option('--file', '-f', default='deployment.yaml', help='Deployment manifest path')
@click.option('--env-file', 'env_files', multiple=True, help='.env file with configuration values')
@click.option('--config', '-c', 'overrides', multiple=True, help='Configuration override as KEY=VALUE')
@click.option('--verbose', '-v', is_flag=True, help='Log overlay decisions')
@click.pass_context
def cli(ctx, file, env_files, overrides, verbose):
    """
    EdgeOverlay - cluster create options for edge modules.

    Renders the container create options a module is started with when
    running in a cluster.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj['file'] = file
    ctx.obj['config'] = ConfigSource(env_files=list(env_files), overrides=_parse_overrides(overrides))

def _load_manifest(ctx):
    file = ctx.obj['file']
    if not os.path.exists(file):
        raise click.ClickException(f"{file} not found.")
    try:
        return DeploymentParser().parse(file)
    except EdgeOverlayError as e:
        raise click.ClickException(str(e)) from e

@cli.command()
@click.pass_context
def modules(ctx):
    """List modules in the manifest"""
    manifest = _load_manifest(ctx)
    click.echo(f"{'MODULE':15} {'TYPE':8} {'IMAGE'}")
    click.echo("-" * 50)
    for name, module in manifest.modules.items():
        click.echo(f"{name:15} {module.type:8} {module.image}")

@cli.command()
@click.argument('module_name')
@click.option('--show-secrets', is_flag=True, help='Print registry passwords in clear text')
@click.pass_context
def render(ctx, module_name, show_secrets):
    """Print the combined config for a module."""
    manifest = _load_manifest(ctx)
    module = manifest.find_module(module_name)
    if module is None:
        raise click.ClickException(f"Module {module_name} not found in {ctx.obj['file']}.")

    config = ctx.obj['config']
    try:
        provider = ClusterCombinedConfigProvider(
            DockerCombinedConfigProvider(),
            config,
            OverlaySettings.from_config(config),
        )
        combined = provider.get_combined_config(module, manifest.runtime)
    except EdgeOverlayError as e:
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(combined.to_payload(mask_secrets=not show_secrets), indent=2))

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})

if __name__ == '__main__':
    main()
