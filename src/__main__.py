#!/usr/bin/env python3
"""
studiolex - Habitat Studio command tokenizer

Tokenizes a file of Habitat Studio commands and writes either a token
listing (to check how a snippet will be categorized) or Pygments-highlighted
HTML (to drop into documentation).

Usage:
    studiolex inputdir/ outputdir/ --inputFile setup.studio

    The result is written to outputdir/ as <inputFile>.tokens or
    <inputFile>.html, depending on --format.

Examples:
    # Token listing
    studiolex . out/ --inputFile setup.studio

    # Highlighted HTML with a custom style and word lists
    studiolex . out/ --inputFile setup.studio --format html \\
        --style friendly --wordlists studio-words.yaml

    # Trace every state push and pop
    studiolex . out/ --inputFile setup.studio -vvv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    Tokenizer,
    tokens_render,
    html_render,
    wordlists_load,
    WordListError,
    RenderError,
    __version__,
    LOG,
    logger_configure,
    state_connectToLogger,
)
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="studiolex - Habitat Studio command tokenizer and highlighter",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Studio source file (relative to inputdir)"
)

parser.add_argument(
    "--format",
    default=None,
    choices=["tokens", "html"],
    help="Output form. Defaults to STUDIOLEX_OUTPUT_FORMAT or 'tokens'",
)

parser.add_argument(
    "--wordlists",
    default=None,
    type=str,
    help="YAML file with 'keywords' and/or 'builtins' lists",
)

parser.add_argument(
    "--style",
    default=None,
    type=str,
    help="Pygments style for HTML output. Defaults to STUDIOLEX_PYGMENTS_STYLE or 'monokai'",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input file and prepare the output location.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source file
            - outputFile: Path the rendered output will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input file does not exist
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.format is None:
        state.format = appsettings.output_format
    if state.style is None:
        state.style = appsettings.pygments_style

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.outputFile = state.outputdir / appsettings.outputName_make(
        Path(state.inputFile).name, state.format
    )
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the studio source file.

    Returns:
        ProgramState with added field:
            - sourceText: File contents

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def source_tokenize(inputstate: ProgramState) -> ProgramState:
    """
    Resolve word lists and tokenize the source.

    Word lists come from settings (STUDIOLEX_KEYWORDS / STUDIOLEX_BUILTINS),
    overridden per key by --wordlists or STUDIOLEX_WORDLISTS_FILE.

    Returns:
        ProgramState with added fields:
            - keywords, builtins: Effective word lists
            - tokens: List[Token]

    Exits:
        1 if the word-list file is invalid
    """
    state = inputstate.copy()

    state.keywords = list(appsettings.keywords)
    state.builtins = list(appsettings.builtins)
    wordlists = state.wordlists or appsettings.wordlists_file
    if wordlists:
        try:
            state.keywords, state.builtins = wordlists_load(
                wordlists, state.keywords, state.builtins
            )
        except WordListError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Loaded word lists from {wordlists}", level=2)

    LOG("Tokenizing source...", level=1)
    tokenizer = Tokenizer(keywords=state.keywords, builtins=state.builtins)
    state.tokens = tokenizer.tokenize(state.sourceText)
    LOG(f"Produced {len(state.tokens)} tokens", level=2)
    return state


def output_render(inputstate: ProgramState) -> ProgramState:
    """
    Render tokens in the selected format and write the output file.

    Returns:
        ProgramState with added field:
            - renderedOutput: Text written to outputFile

    Exits:
        1 if rendering or writing fails
    """
    state = inputstate.copy()

    if state.tokens is None:
        print("Error: No tokens available", file=sys.stderr)
        sys.exit(1)

    LOG(f"Rendering {state.format} output...", level=1)
    try:
        if state.format == "html":
            state.renderedOutput = html_render(
                state.sourceText, style=state.style, tokens=state.tokens
            )
        else:
            state.renderedOutput = tokens_render(state.tokens)
        state.outputFile.write_text(state.renderedOutput, encoding="utf-8")
    except (RenderError, OSError) as e:
        print(f"Render error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """Summarize the run (terminal pipeline stage)."""
    state: ProgramState = inputstate.copy()
    LOG("\n✓ Tokenization successful!", level=1)
    LOG(f"  Tokens: {len(state.tokens or [])}", level=1)
    LOG(f"  Output: {state.outputFile}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="studiolex - Habitat Studio command tokenizer",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - tokenize a studio source file and write the result.

    Pipeline:
        1. env_check: Validate paths, resolve format and style
        2. source_read: Read the source file
        3. source_tokenize: Resolve word lists and tokenize
        4. output_render: Render tokens or HTML and write the output
        5. results_report: Summarize

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )
    logger_configure()
    state_connectToLogger(state)
    pipeline(state, env_check, source_read, source_tokenize, output_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
