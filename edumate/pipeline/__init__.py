"""Asynchronous response pipeline.

Responsibilities:
    - Responder protocol for pluggable document intelligence
    - Serialized execution with a busy signal
    - Generation tokens so results from before a reset are discarded
    - Timeouts surfaced as failure completions
"""

from edumate.pipeline.responder import Responder, SimulatedResponder
from edumate.pipeline.response_pipeline import PipelineBusyError, ResponsePipeline

__all__ = ["PipelineBusyError", "Responder", "ResponsePipeline", "SimulatedResponder"]
