"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the expansion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile, cwd
        - env_check: inputSourceFile, outputTargetFile, sourceFormat, envOK
        - source_read: sourceData
        - shortcodes_expand: expandedData, expandResult
        - output_write: (writes outputTargetFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input file
        outputdir: Directory for the expanded output file
        verbosity: Logging verbosity level (1-3)
        inputFile: Input filename (relative to inputdir)
        outputFile: Output filename (relative to outputdir), defaults to inputFile
        cwd: Value for the [@cwd] built-in, defaults to the resolved inputdir
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        outputTargetFile: Resolved path to the output file
        sourceFormat: One of "text", "json", "yaml"
        sourceData: Raw text or loaded tree
        expandedData: sourceData with shortcodes substituted
        expandResult: Expansion summary (status, format, match_count)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    cwd: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputTargetFile: Path = field(default=Path("/"))
    sourceFormat: str = field(default="text")
    sourceData: Any = field(default=None)
    expandedData: Any = field(default=None)
    expandResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the expansion pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, cwd, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for expanded output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            shortcodes_expand,
            output_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
