"""CLI entry point for pi-lineedit: a line-echo REPL. Uses Click for argument parsing."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from pi.lineedit.config import load_config
from pi.lineedit.editor import LineEditor
from pi.lineedit.terminal import ProcessTerminal

logger = logging.getLogger(__name__)


def run_repl(editor: LineEditor, prompt: str) -> int:
    """Echo lines until Ctrl-C or end of input; return how many were read."""
    count = 0
    while True:
        try:
            line = editor.readline(prompt)
        except (KeyboardInterrupt, EOFError):
            editor.terminal.write("\n")
            logger.debug("Input ended after %d lines", count)
            return count
        editor.terminal.write(line)
        count += 1


@click.command()
@click.option("--prompt", default=">> ", show_default=True, help="Prompt printed before each line")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (default: ~/.pi/lineedit.json)",
)
@click.option("--history-file", type=click.Path(dir_okay=False), default=None, help="History file")
@click.option("--history-size", type=int, default=None, help="Maximum number of history lines")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
)
def main(prompt, config_path, history_file, history_size, log_level):
    """Read lines interactively and echo them back."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config(config_path)
    if history_file is not None:
        config.history_file = Path(history_file)
    if history_size is not None:
        config.history_size = history_size

    editor = LineEditor(config, terminal=ProcessTerminal())
    run_repl(editor, prompt)


if __name__ == "__main__":
    main()
