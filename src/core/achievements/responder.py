"""
Supportive Responder Module.

Picks a short supportive message for a new mood entry. The engine only cares
whether a response exists (it counts towards AI interactions), not what it says.
"""
import random
from typing import Optional, Protocol

from .types import StressLevel


class ResponseGenerator(Protocol):
    async def generate(
        self,
        mood: int,
        stress_level: StressLevel,
        journal_text: Optional[str] = None
    ) -> Optional[str]: ...


class ScriptedResponder:
    """Canned responses grouped by how the user seems to be doing."""

    RESPONSES = {
        "calm": [
            "It's wonderful that you're feeling calm and centered today. Keep nurturing this positive energy!",
            "Your peaceful state is a strength. Consider what's working well for you right now.",
            "Feeling good is something to celebrate. Take a moment to appreciate this feeling."
        ],
        "steady": [
            "You're doing great by checking in with yourself. It's normal to have ups and downs.",
            "This balanced feeling shows your resilience. What small thing could make today even better?",
            "You're handling things well. Remember that it's okay to take breaks when you need them."
        ],
        "struggling": [
            "I hear that you're going through a challenging time. Take a deep breath - you're stronger than you know.",
            "Difficult moments are temporary. Try the 4-7-8 breathing technique: breathe in for 4, hold for 7, out for 8.",
            "You're not alone in this. Consider reaching out to someone you trust or trying a short mindfulness exercise."
        ]
    }

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    @staticmethod
    def categorize(mood: int, stress_level: StressLevel) -> str:
        # struggling wins over calm
        if mood <= 4 or stress_level is StressLevel.HIGH:
            return "struggling"
        if mood >= 8 and stress_level is StressLevel.LOW:
            return "calm"
        return "steady"

    async def generate(
        self,
        mood: int,
        stress_level: StressLevel,
        journal_text: Optional[str] = None
    ) -> Optional[str]:
        options = self.RESPONSES[self.categorize(mood, stress_level)]
        return self._rng.choice(options)
