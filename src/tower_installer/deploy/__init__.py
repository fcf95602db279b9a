"""Deployment package for the tower stack.

1. Select a mode (source checkout, image archive, published images)
2. Plan the step chain for that mode
3. Run the steps in order, stopping at the first failure
"""

from .compose import ComposeDocument, ComposeGenerator, ComposeService
from .modes import (
    DeploymentMode,
    FromArchive,
    FromPublishedImage,
    FromSource,
    resolve_path,
    select_mode,
)
from .sequencer import DeploymentSequencer, SequencerState
from .stack import StackManager
from .steps import Step, SubStep

__all__ = [
    # Modes
    "DeploymentMode",
    "FromSource",
    "FromArchive",
    "FromPublishedImage",
    "resolve_path",
    "select_mode",
    # Compose generation
    "ComposeDocument",
    "ComposeGenerator",
    "ComposeService",
    # Steps
    "Step",
    "SubStep",
    "DeploymentSequencer",
    "SequencerState",
    # Teardown
    "StackManager",
]
