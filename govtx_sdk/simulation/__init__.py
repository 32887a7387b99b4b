"""
Simulation module for the govtx SDK.

Builds simulation payloads from transaction intents and interprets the
provider's responses.
"""
from .builder import build_simulation_request, sanitize_for_logging
from .client import SimulationClient, interpret_simulation_response

__all__ = [
    'SimulationClient',
    'build_simulation_request',
    'interpret_simulation_response',
    'sanitize_for_logging',
]
