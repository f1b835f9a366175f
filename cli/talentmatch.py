#!/usr/bin/env python
"""TalentMatch Typer-based CLI.

Drives the ingestion boundary from submission files:
  - Config precedence (user global, project local, --config)
  - Job postings and candidate applications, with optional resume PDF
  - Resume signal extraction
  - Pretty output via rich, raw payloads with --json
"""
from __future__ import annotations
import contextvars
import json
import logging
import os
from logging import Logger
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libs.config import Settings
from libs.matching.errors import ConfigurationError, ExtractionError

APP = typer.Typer(add_completion=False, help="TalentMatch CLI")
console = Console()

# Sub-apps
config_app = typer.Typer(help="Config inspection")
jobs_app = typer.Typer(help="Job postings")
candidates_app = typer.Typer(help="Candidate applications")
resume_app = typer.Typer(help="Resume operations")

APP.add_typer(config_app, name="config")
APP.add_typer(jobs_app, name="jobs")
APP.add_typer(candidates_app, name="candidates")
APP.add_typer(resume_app, name="resume")


# ------------------ Config Loading ------------------
def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open('r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_config(explicit: Optional[Path]) -> Dict[str, Any]:
    layers = []
    # defaults
    layers.append({
        'logging': {'level': 'INFO'},
        'env': {},
    })
    # user global
    layers.append(_load_yaml(Path.home() / '.talentmatch' / 'config.yaml'))
    # project local
    layers.append(_load_yaml(Path('talentmatch.yaml')))
    # explicit
    if explicit:
        if not explicit.exists():
            raise typer.BadParameter(f"Config file not found: {explicit}")
        layers.append(_load_yaml(explicit))
    # merge
    merged: Dict[str, Any] = {}
    for layer in layers:
        for k, v in layer.items():
            if isinstance(v, dict) and isinstance(merged.get(k), dict):
                merged[k].update(v)
            else:
                merged[k] = v
    return merged


def settings_env(conf: Dict[str, Any]) -> Dict[str, str]:
    """Process environment, with the config's ``env`` section filling unset keys"""
    env = {str(k): str(v) for k, v in (conf.get('env') or {}).items() if v is not None}
    env.update(os.environ)
    return env


def print_config(conf: Dict[str, Any]):
    table = Table(title="Effective Configuration")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in conf.items():
        table.add_row(escape(str(key)), escape(str(value)))
    console.print(table)


# Global options context
class Context:
    def __init__(self):
        self.config: Dict[str, Any] = {}
        self.settings: Settings | None = None
        self.logger: Logger | None = None


pass_context = contextvars.ContextVar("tm_ctx")


@APP.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, '--config', help='Config file path')):
    load_dotenv()
    c = Context()
    c.config = load_config(config)
    # credentials are checked by the commands that need them
    try:
        c.settings = Settings.from_env(settings_env(c.config), validate=False)
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    # logging setup (TM_LOG_LEVEL beats the config file)
    level_name = c.settings.log_level or c.config.get('logging', {}).get('level', 'INFO')
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s %(message)s')
    c.logger = logging.getLogger('talentmatch')
    pass_context.set(c)


def _build_service():
    from libs.matching.service import create_ingestion_service

    ctx = pass_context.get()
    try:
        return create_ingestion_service(ctx.settings)
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _load_submission(path: Path) -> Dict[str, Any]:
    """Read a JSON or YAML submission file into a payload mapping"""
    if not path.exists():
        console.print(f"[red]Submission file not found: {escape(str(path))}[/red]")
        raise typer.Exit(code=1)
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        console.print(f"[red]Could not parse {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    if not isinstance(data, dict):
        console.print(f"[red]{escape(str(path))} must contain a mapping of form fields[/red]")
        raise typer.Exit(code=1)
    return data


def _print_matches(title: str, matches: List[Dict[str, Any]], columns: List[str]):
    if not matches:
        console.print("[yellow]No matches found.[/yellow]")
        return
    table = Table(title=title)
    table.add_column('Rank', style="cyan")
    table.add_column('ID', style="white")
    table.add_column('Score', style="green")
    for column in columns:
        table.add_column(column.replace('_', ' ').title(), style="yellow")
    for i, match in enumerate(matches, 1):
        metadata = match.get('metadata') or {}
        table.add_row(
            str(i),
            escape(str(match['id'])),
            f"{match['score']:.3f}",
            *[escape(str(metadata.get(column, ''))) for column in columns],
        )
    console.print(table)


def _finish(result: Dict[str, Any], json_out: bool, title: str, key: str, columns: List[str]):
    if json_out:
        typer.echo(json.dumps(result, indent=2))
    elif result.get('success'):
        if result.get('jobId'):
            console.print(f"[green]Stored job {escape(result['jobId'])}[/green]")
        console.print(result['analysis'], markup=False, highlight=False)
        _print_matches(title, result[key], columns)
    else:
        console.print(f"[red]{escape(result['error'])}[/red]")
    if not result.get('success'):
        raise typer.Exit(code=1)


# --------------- Config Commands ---------------
@config_app.command('show')
def config_show():
    """Show the layered config and the resolved service settings"""
    ctx = pass_context.get()
    print_config({k: v for k, v in ctx.config.items() if k != 'env'})
    print_config(ctx.settings.describe())
    problems = ctx.settings.problems()
    for problem in problems:
        console.print(f"[red]{escape(problem)}[/red]")
    if problems:
        raise typer.Exit(code=1)
    console.print("[green]Config OK[/green]")


# --------------- Job Commands ---------------
@jobs_app.command('post')
def jobs_post(
    file: Path = typer.Argument(..., help="JSON or YAML job posting"),
    json_out: bool = typer.Option(False, '--json', help="Output as JSON"),
):
    """Store a job posting and list the closest candidates"""
    payload = _load_submission(file)
    result = _build_service().handle_job_ingestion(payload)
    _finish(result, json_out, "Matching Candidates", 'matchingCandidates', ['name', 'email', 'skills'])


# --------------- Candidate Commands ---------------
@candidates_app.command('submit')
def candidates_submit(
    file: Path = typer.Argument(..., help="JSON or YAML candidate profile"),
    resume: Optional[Path] = typer.Option(None, '--resume', help="Resume PDF to attach"),
    json_out: bool = typer.Option(False, '--json', help="Output as JSON"),
):
    """Store a candidate profile and list the closest job postings"""
    payload = _load_submission(file)
    resume_bytes = None
    if resume is not None:
        if not resume.exists():
            console.print(f"[red]Resume not found: {escape(str(resume))}[/red]")
            raise typer.Exit(code=1)
        resume_bytes = resume.read_bytes()
    result = _build_service().handle_candidate_ingestion(payload, resume_bytes)
    _finish(result, json_out, "Matching Jobs", 'matchingJobs', ['title', 'company', 'location'])


# --------------- Resume Commands ---------------
@resume_app.command('parse')
def resume_parse(
    file: Path = typer.Argument(..., help="Resume PDF"),
    json_out: bool = typer.Option(False, '--json', help="Output as JSON"),
):
    """Extract text and skill/education/experience signals from a resume"""
    from libs.resume.parser import create_resume_parser

    if not file.exists():
        console.print(f"[red]Resume not found: {escape(str(file))}[/red]")
        raise typer.Exit(code=1)
    try:
        parsed = create_resume_parser().parse_file(file)
    except ExtractionError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    data = {
        'skills': sorted(parsed.skills),
        'education': parsed.education,
        'experience': parsed.experience,
        'characters': len(parsed.text),
    }
    if json_out:
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title=f"Resume: {escape(file.name)}")
    table.add_column("Signal", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Skills", escape(", ".join(data['skills'])) or "-")
    table.add_row("Education", escape("\n".join(data['education'])) or "-")
    table.add_row("Experience", escape("\n".join(data['experience'])) or "-")
    table.add_row("Characters", str(data['characters']))
    console.print(table)


if __name__ == '__main__':
    APP()
