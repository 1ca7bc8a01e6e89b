# Transcript Accumulator
"""
Ordered, append-only record of the finalized turns of one call.
"""

import logging
from typing import Any, Dict, Iterator, List, Tuple

from .models import Speaker, Utterance

logger = logging.getLogger(__name__)

FINAL_TRANSCRIPT = "final"


class TranscriptAccumulator:
    """
    Collects final utterances in arrival order.

    Partial transcriptions are dropped rather than stored. There is no
    removal operation; a transcript lives as long as its call controller.
    """

    def __init__(self):
        self._utterances: List[Utterance] = []

    def append(self, utterance: Utterance, final: bool = True) -> bool:
        """Store a final utterance. Returns False when it was discarded."""
        if not final:
            return False
        self._utterances.append(utterance)
        return True

    def record(self, message: Any) -> bool:
        """
        Append a voice session ``message`` payload if it is a final transcript.

        Args:
            message: Payload shaped like
                ``{"type": "transcript", "role": ..., "transcriptType": ..., "transcript": ...}``

        Returns:
            True if an utterance was stored
        """
        if not isinstance(message, dict) or message.get("type") != "transcript":
            return False

        try:
            speaker = Speaker(message.get("role"))
        except ValueError:
            logger.warning(f"Ignoring transcript from unknown role: {message.get('role')!r}")
            return False

        utterance = Utterance(speaker=speaker, text=message.get("transcript", ""))
        return self.append(utterance, final=message.get("transcriptType") == FINAL_TRANSCRIPT)

    def latest(self) -> str:
        """Text of the most recent utterance, or an empty string."""
        if not self._utterances:
            return ""
        return self._utterances[-1].text

    def as_messages(self) -> List[Dict[str, str]]:
        return [utterance.as_message() for utterance in self._utterances]

    @property
    def utterances(self) -> Tuple[Utterance, ...]:
        return tuple(self._utterances)

    @property
    def is_empty(self) -> bool:
        return not self._utterances

    def __len__(self) -> int:
        return len(self._utterances)

    def __iter__(self) -> Iterator[Utterance]:
        return iter(tuple(self._utterances))
