"""Command-line interface for reposync."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from reposync import RepoSync as RepoSync
from reposync import load_config as load_config
from reposync.cli.app import main as main
from reposync.cli.commands import help_text as help_text_command
from reposync.cli.commands import update as update_command
from reposync.cli.commands import validate as validate_command
from reposync.cli.parser import build_parser as build_parser

_format_update_summary = update_command.format_update_summary
_format_validate_summary = validate_command.format_validate_summary

_run_update = update_command.run_update
_run_validate = validate_command.run_validate
_run_help_text = help_text_command.run_help_text
