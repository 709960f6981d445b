"""Static site generation."""

from staticsite.generator.errors import (
    GenerationError,
    NotGeneratedError,
    OutputPathError,
)
from staticsite.generator.generator import Generator, not_generated_message
from staticsite.generator.io import AtomicWriter
from staticsite.generator.metrics import GeneratorMetrics
from staticsite.generator.models import (
    GeneratedFile,
    GenerationManifest,
    GenerationResult,
    PageFailure,
)
from staticsite.generator.page import Page
from staticsite.generator.reporter import ConsoleReporter, Reporter
from staticsite.generator.state_machine import (
    GenerationState,
    GenerationStateError,
    GenerationStateMachine,
)


__all__ = [
    "AtomicWriter",
    "ConsoleReporter",
    "GeneratedFile",
    "GenerationError",
    "GenerationManifest",
    "GenerationResult",
    "GenerationState",
    "GenerationStateError",
    "GenerationStateMachine",
    "Generator",
    "GeneratorMetrics",
    "NotGeneratedError",
    "OutputPathError",
    "Page",
    "PageFailure",
    "Reporter",
    "not_generated_message",
]
