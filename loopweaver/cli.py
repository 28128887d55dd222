#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for LoopWeaver.

This module provides the main CLI entry point and all subcommands for
circular genome assembly.
"""

import sys
import logging
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import (
    load_config,
    save_config_template,
    validate_config,
    ConfigValidationError,
)
from .io import load_sequences, write_fasta, READ_FORMATS
from .utils.pipeline import CircularAssembler


def _setup_logging(config, verbose=False, quiet=False):
    """Configure root logging from the output.logging config section."""
    level_name = config['output']['logging']['level']
    if verbose:
        level_name = 'DEBUG'
    elif quiet:
        level_name = 'ERROR'

    handlers = [logging.StreamHandler()]
    log_file = config['output']['logging'].get('log_file')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level_name),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def _exit_on_invalid(config):
    errors = validate_config(config)
    if errors:
        click.echo("✗ Invalid configuration:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    LoopWeaver: circular genome assembly from equal-length reads

    Reconstructs a plasmid or circular genome with de Bruijn graphs,
    sweeping the k+1-mer size down to find a stable cyclic superstring.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='loopweaver_config.yaml',
              help='Output configuration file path')
def config_init(output):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating configuration template: {output}")

    try:
        save_config_template(Path(output))
        click.echo(f"✓ Configuration file created: {output}")
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)
    _exit_on_invalid(config)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    assembly = config['assembly']
    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nInput:")
    click.echo(f"  Format: {config['input']['format']}")
    click.echo(f"  Validate read lengths: {config['input']['validate_read_lengths']}")
    click.echo("\nAssembly:")
    max_k = assembly['max_kplus1_size'] or 'read length'
    click.echo(f"  k+1-mer sizes: {max_k} down to {assembly['min_kplus1_size']}")
    click.echo(f"  Expected superstrings: {assembly['expected_superstrings']}")
    click.echo("\nLogging:")
    click.echo(f"  Level: {config['output']['logging']['level']}")


# ============================================================================
# Assembly Command
# ============================================================================

@main.command()
@click.argument('reads', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--format', '-f', 'read_format', type=click.Choice(list(READ_FORMATS)),
              default=None, help='Reads file format (default: from config, auto-detect)')
@click.option('--min-k', type=int, default=None,
              help='Smallest k+1-mer size to try (>= 3)')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Write the assembled template to this FASTA file')
@click.pass_context
def assemble(ctx, reads, config_file, read_format, min_k, output):
    """Assemble a circular template from READS (one read per line, FASTA or FASTQ)."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)
    _exit_on_invalid(config)

    if read_format:
        config['input']['format'] = read_format
    if min_k is not None:
        config['assembly']['min_kplus1_size'] = min_k

    try:
        _setup_logging(config, ctx.obj.get('VERBOSE'), ctx.obj.get('QUIET'))
    except OSError as e:
        click.echo(f"✗ Cannot open log file: {e}", err=True)
        sys.exit(1)

    try:
        sequences = load_sequences(reads, config['input']['format'])
        assembler = CircularAssembler(config)
        result = assembler.assemble(sequences)
    except (ValueError, ConfigValidationError) as e:
        click.echo(f"✗ Assembly failed: {e}", err=True)
        sys.exit(1)

    for outcome in result.outcomes:
        if not outcome.resolved:
            continue
        count = "Two" if len(outcome.superstrings) == 2 else len(outcome.superstrings)
        click.echo(f"{count} cyclic superstrings found, at k+1-mer size {outcome.kplus1_size}!")
        click.echo(f"These are: {outcome.superstrings}")
        if outcome.consistent is False:
            click.echo(
                f"Warning: cyclic superstrings for k+1-mer size of "
                f"{outcome.kplus1_size} found not identical to template"
            )

    if not result.success:
        click.echo("✗ No stable cyclic assembly found at any k+1-mer size", err=True)
        sys.exit(1)

    click.echo(f"Template ({len(result.template)} bp, k+1-mer size "
               f"{result.template_kplus1_size}): {result.template}")

    if output:
        write_fasta(output, {'circular_template': result.template})
        click.echo(f"✓ Template written to {output}")


if __name__ == '__main__':
    sys.exit(main())
