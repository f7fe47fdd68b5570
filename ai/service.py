from abc import ABC, abstractmethod

# Generation parameters shared by every provider.  Low randomness keeps
# the SECTION / HEADERS / ROW reply format stable.
TEMPERATURE = 0.1
MAX_OUTPUT_TOKENS = 20000
THINKING_BUDGET = 8000


class AIService(ABC):
    """
    Base class for text-generation services.

    Implementations send a single prompt to an LLM with the fixed
    generation parameters above and return the reply text.
    """

    @abstractmethod
    def get_decision(self, prompt: str) -> str:
        """Send a text prompt to the LLM and return its response (``""`` if none)."""
        ...
