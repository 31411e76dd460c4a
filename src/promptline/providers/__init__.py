"""Input providers that supply raw answers and display prompt text."""

from promptline.providers.base import InputProvider
from promptline.providers.callback import CallbackInput
from promptline.providers.console import ConsoleInput
from promptline.providers.defaults import DefaultsInput
from promptline.providers.recording import Exchange, RecordingInput
from promptline.providers.scripted import ScriptedInput

__all__ = [
    "InputProvider",
    "ConsoleInput",
    "CallbackInput",
    "DefaultsInput",
    "ScriptedInput",
    "RecordingInput",
    "Exchange",
]
