"""promptline CLI entry point: ask a question from the shell."""

from __future__ import annotations

import datetime
import logging
import re
import sys
from pathlib import Path
from typing import Any

import click

from promptline import __version__
from promptline.config import PromptConfig
from promptline.converter import AnswerKind
from promptline.errors import QuestionError
from promptline.model.question import Question, WhitespaceMode
from promptline.prompter import Prompter

ANSWER_TYPES: dict[str, Any] = {
    "string": str,
    "integer": int,
    "float": float,
    "symbol": AnswerKind.SYMBOL,
    "regex": re.Pattern,
    "date": datetime.date,
    "datetime": datetime.datetime,
    "path": Path,
}


@click.group()
@click.version_option(version=__version__, prog_name="promptline")
@click.option("--verbose", is_flag=True, help="Log answer handling to stderr")
def cli(verbose: bool) -> None:
    """promptline - ask validated questions at the terminal."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _parse_bound(value: str | None, answer_type: Any) -> Any:
    """Convert a range bound with the same rules as the answer itself."""
    if value is None:
        return None
    question = Question("", answer_type)
    question.answer = value
    return question.convert()


def _format(answer: Any) -> str:
    if isinstance(answer, re.Pattern):
        return answer.pattern
    return str(answer)


@cli.command()
@click.argument("template")
@click.option(
    "--type", "type_name", type=click.Choice(sorted(ANSWER_TYPES)), default="string",
    help="Type to convert the answer to",
)
@click.option("--choice", "choices", multiple=True, help="Allowed answer; may be abbreviated (repeatable)")
@click.option("--default", default=None, help="Answer used when the input is empty")
@click.option("--validate", "pattern", default=None, help="Regular expression the answer must match")
@click.option("--above", default=None, help="Answer must be greater than this")
@click.option("--below", default=None, help="Answer must be less than this")
@click.option(
    "--whitespace", type=click.Choice([mode.value for mode in WhitespaceMode]), default="strip",
    help="Whitespace handling",
)
@click.option(
    "--case", "case_mode", type=click.Choice(["none", "up", "down", "capitalize"]), default="none",
    help="Case handling",
)
@click.option("--gather", type=int, default=None, help="Collect this many answers")
@click.option("--confirm", is_flag=True, help="Confirm the answer before accepting it")
@click.option("--max-attempts", type=int, default=None, help="Give up after this many rejected answers")
def ask(
    template: str,
    type_name: str,
    choices: tuple[str, ...],
    default: str | None,
    pattern: str | None,
    above: str | None,
    below: str | None,
    whitespace: str,
    case_mode: str,
    gather: int | None,
    confirm: bool,
    max_attempts: int | None,
) -> None:
    """Ask TEMPLATE and print the accepted answer."""
    answer_type = list(choices) if choices else ANSWER_TYPES[type_name]
    config = PromptConfig(max_attempts=max_attempts, whitespace_mode=whitespace)
    prompter = Prompter(config=config)

    try:
        answer = prompter.ask(
            template,
            answer_type,
            default=default,
            validator=pattern,
            above=_parse_bound(above, answer_type),
            below=_parse_bound(below, answer_type),
            case_mode=case_mode,
            gather=gather,
            confirm=confirm or None,
        )
    except QuestionError as exc:
        click.echo(f"Gave up: {exc}", err=True)
        sys.exit(1)
    except EOFError:
        click.echo("Input ended before an answer was accepted.", err=True)
        sys.exit(1)

    if isinstance(answer, list):
        for item in answer:
            click.echo(_format(item))
    else:
        click.echo(_format(answer))


@cli.command()
@click.argument("template")
@click.option("--character", is_flag=True, help="Read a single key instead of a line")
def agree(template: str, character: bool) -> None:
    """Ask a yes/no TEMPLATE; exit 0 for yes, 1 for no."""
    try:
        answer = Prompter().agree(template, character=character)
    except EOFError:
        click.echo("Input ended before an answer was given.", err=True)
        sys.exit(2)
    sys.exit(0 if answer else 1)
