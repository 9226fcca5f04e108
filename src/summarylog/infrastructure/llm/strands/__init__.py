"""strands-agents infrastructure."""

from summarylog.infrastructure.llm.strands.exceptions import map_strands_exception
from summarylog.infrastructure.llm.strands.factory import create_agent, create_model
from summarylog.infrastructure.llm.strands.structured_generator import (
    StrandsStructuredGenerator,
)

__all__ = [
    "StrandsStructuredGenerator",
    "create_agent",
    "create_model",
    "map_strands_exception",
]
