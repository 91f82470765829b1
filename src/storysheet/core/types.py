"""Shared type aliases for the core and domain layers."""
from typing import Literal

SpeakerPosition = Literal["left", "center", "right"]
ChoiceStyle = Literal["danger", "subtle"]
Row = list[str]

__all__ = ["ChoiceStyle", "Row", "SpeakerPosition"]
