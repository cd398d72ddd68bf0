#!/usr/bin/env python3
"""
atcode - Shortcode template engine

Expands [@name attr="value"]content[/@name] shortcodes in a text, JSON or
YAML file and writes the result to an output directory.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Text-first: Source files stay readable with shortcodes left in place
    - Structure-preserving: JSON/YAML trees keep their shape, only string
      leaves are rewritten
    - Best-effort trees: a failing entry is logged and dropped, the rest of
      the file is still expanded

Built-in shortcodes:
    [@cwd]   working directory (--cwd, defaults to inputdir)
    [@date]  current date, host locale
    [@time]  current time, host locale

Usage:
    atcode inputdir/ outputdir/ --inputFile settings.yaml

Examples:
    # Expand a text file
    atcode . output/ --inputFile notes.txt

    # Expand a JSON config under a different name, with an explicit cwd
    atcode . output/ --inputFile config.json --outputFile config.resolved.json --cwd /srv/site

    # Verbose output
    atcode . output/ --inputFile settings.yaml -vv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .lib import Shortcodes, HandlerError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
         _                 _
   __ _| |_ ___ ___   __| | ___
  / _` | __/ __/ _ \ / _` |/ _ \
 | (_| | || (_| (_) | (_| |  __/
  \__,_|\__\___\___/ \__,_|\___|

  Shortcode template engine
"""

FORMATS_BY_SUFFIX = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}

# Define CLI arguments
parser = ArgumentParser(
    description="atcode - expand [@shortcode] directives in text, JSON and YAML files",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input file to expand (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Output filename (relative to outputdir). Defaults to the input filename",
)

parser.add_argument(
    "--cwd",
    default=None,
    type=str,
    help="Value of the [@cwd] shortcode. Defaults to the resolved inputdir",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def format_detect(path: Path) -> str:
    """Source format ("text", "json" or "yaml") from the file suffix"""
    return FORMATS_BY_SUFFIX.get(path.suffix.lower(), "text")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - outputTargetFile: Path the expanded file will be written to
            - sourceFormat: "text", "json" or "yaml"
            - cwd: [@cwd] value (inputdir if not given)
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    state.sourceFormat = format_detect(input_file)
    LOG(f"Input file: {input_file} ({state.sourceFormat})", level=2)

    if state.cwd is None:
        state.cwd = str(state.inputdir.resolve())
    LOG(f"[@cwd] resolves to: {state.cwd}", level=2)

    state.outputTargetFile = state.outputdir / (state.outputFile or state.inputFile)
    state.outputTargetFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputTargetFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input file, loading JSON/YAML into a tree.

    Returns:
        ProgramState with added field:
            - sourceData: str for text files, the loaded tree otherwise

    Exits:
        1 if the file cannot be read or parsed
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        text = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(text)} characters from {state.inputSourceFile.name}", level=2)
    except Exception as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if state.sourceFormat == "json":
            state.sourceData = json.loads(text)
        elif state.sourceFormat == "yaml":
            state.sourceData = yaml.safe_load(text)
        else:
            state.sourceData = text
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error parsing {state.sourceFormat} input: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def shortcodes_expand(inputstate: ProgramState) -> ProgramState:
    """
    Substitute every shortcode in the loaded source.

    Text sources are expanded as one string and fail as a whole if a
    handler raises. Trees are walked entry by entry; failing entries are
    logged and dropped.

    Returns:
        ProgramState with added fields:
            - expandedData: Expanded text or tree
            - expandResult: Dict containing status, format and match_count

    Exits:
        1 if a handler raises while expanding a text source
    """
    state = inputstate.copy()

    LOG("Expanding shortcodes...", level=1)

    processor = Shortcodes(cwd=state.cwd)

    if state.sourceFormat == "text":
        try:
            result = processor.string_parseSync(state.sourceData)
        except HandlerError as e:
            print(f"Expansion error: {e}", file=sys.stderr)
            sys.exit(1)
        state.expandedData = result.text
        match_count = len(result.matches)
    else:
        state.expandedData = processor.object_parseSync(state.sourceData)
        match_count = None

    state.expandResult = {
        "status": True,
        "format": state.sourceFormat,
        "match_count": match_count,
    }
    LOG(f"Expansion complete: {state.expandResult}", level=2)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the expanded data in the same format it was read in.

    Returns:
        ProgramState unchanged apart from the written file

    Exits:
        1 if the file cannot be written
    """
    state = inputstate.copy()

    if state.sourceFormat == "json":
        text = json.dumps(state.expandedData, indent=2, ensure_ascii=False) + "\n"
    elif state.sourceFormat == "yaml":
        text = yaml.safe_dump(state.expandedData, sort_keys=False, allow_unicode=True)
    else:
        text = state.expandedData

    try:
        state.outputTargetFile.write_text(text, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.outputTargetFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display expansion results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if expandResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.expandResult:
        print("Error: Expansion failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Expansion successful!", level=1)
    LOG(f"  Output: {state.outputTargetFile}", level=1)
    if state.expandResult["match_count"] is not None:
        LOG(f"  Shortcodes: {state.expandResult['match_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="atcode - Shortcode template engine",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - expand shortcodes in one input file.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and resolve [@cwd]
        2. source_read: Read the file, loading JSON/YAML
        3. shortcodes_expand: Substitute shortcodes
        4. output_write: Write the result in the source format
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - inputFile: str - Input filename
            - outputFile: Optional[str] - Output filename
            - cwd: Optional[str] - [@cwd] value
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing the input file
        outputdir: Directory where the expanded file will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, shortcodes_expand, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
