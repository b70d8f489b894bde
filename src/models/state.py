"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the highlighting pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, format,
          wordlists, style
        - env_check: inputSourceFile, outputFile, envOK
        - source_read: sourceText
        - source_tokenize: keywords, builtins, tokens
        - output_render: renderedOutput (also written to outputFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the studio source file
        outputdir: Directory for rendered output
        verbosity: Logging verbosity level (1-3)
        inputFile: Source filename (relative to inputdir)
        format: "tokens" or "html"; None defers to settings
        wordlists: Optional YAML word-list file
        style: Pygments style for HTML; None defers to settings
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the source file
        outputFile: Resolved path of the file to write
        sourceText: Contents of the source file
        keywords: Effective keyword list
        builtins: Effective builtin list
        tokens: Tokenizer output (List[Token] at runtime)
        renderedOutput: Final text written to outputFile
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    format: Optional[str] = field(default=None)
    wordlists: Optional[str] = field(default=None)
    style: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    sourceText: str = field(default="")
    keywords: Optional[List[str]] = field(default=None)
    builtins: Optional[List[str]] = field(default=None)
    tokens: Optional[List[Any]] = field(default=None)
    renderedOutput: str = field(default="")

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all known CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
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

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            source_tokenize,
            output_render,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
