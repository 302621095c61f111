"""Search criteria domain (normalization, prompt interpretation)."""

from .interpreter import PromptInterpreter
from .normalizer import as_finite_number, energy_target, expand_bpm, normalize_criteria
from .response_parser import parse_model_response

__all__ = [
    "PromptInterpreter",
    "as_finite_number",
    "energy_target",
    "expand_bpm",
    "normalize_criteria",
    "parse_model_response",
]
